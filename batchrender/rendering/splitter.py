"""Splitting of multi-output template results into individual files.

A multi-output template renders to a sequence of ``<file>`` elements::

    <file path="docs/a.md" dedent="true" trim="yes">
        content of a.md
    </file>
    <file path="docs/b.md">content of b.md</file>

``path`` is required and relative to the output root. ``dedent`` and
``trim`` (or its synonym ``strip``) are enabled by ``true`` or ``yes`` in
any letter case.

Element bodies are XML. Entities in text directly inside ``<file>`` are
decoded (``&lt;`` becomes ``<``), while nested elements are written back as
markup with their own text re-escaped, so ``<b>3 &lt; 4</b>`` stays as is.
Wrap bodies that mix markup with literal ``<`` or ``&`` in a CDATA section
to get them through verbatim::

    <file path="index.html"><![CDATA[<p>1 < 2 & 3</p>]]></file>
"""

from __future__ import annotations

import logging
import textwrap
import xml.etree.ElementTree as ET

from ..core.errors import MalformedMultiOutputError
from ..core.models import MultiFileEntry

logger = logging.getLogger(__name__)

FILE_TAG = "file"
_TRUE_VALUES = frozenset({"true", "yes"})


def is_attr_true(value: str | None) -> bool:
    return value is not None and value.lower() in _TRUE_VALUES


def _inner_content(element: ET.Element) -> str:
    parts = [element.text or ""]
    parts.extend(ET.tostring(child, encoding="unicode") for child in element)
    return "".join(parts)


def postprocess(content: str, *, dedent: bool = False, trim: bool = False) -> str:
    """Apply de-indentation, then trimming, to file content."""
    if dedent:
        content = textwrap.dedent(content)
    if trim:
        content = content.strip()
    return content


def split_multi_output(
    rendered: str, source: str = "<rendered>"
) -> list[MultiFileEntry]:
    """Parse rendered multi-output text into file entries.

    Args:
        rendered: Rendered template text
        source: Template identifier used in error messages

    Returns:
        File entries in document order
    """
    if not rendered.strip():
        logger.debug(f"No output files in {source}")
        return []

    try:
        root = ET.fromstring(f"<root>{rendered}</root>")
    except ET.ParseError as e:
        raise MalformedMultiOutputError(f"Invalid format: {source} - {e}") from e

    elements = root.findall(FILE_TAG)
    if not elements:
        raise MalformedMultiOutputError(f"Invalid format: {source} - file tag missing")

    entries: list[MultiFileEntry] = []
    for element in elements:
        output_path = element.get("path")
        if not output_path:
            raise MalformedMultiOutputError(
                f"Invalid format: {source} - path attribute missing"
            )
        dedent = is_attr_true(element.get("dedent"))
        trim = is_attr_true(element.get("trim")) or is_attr_true(element.get("strip"))
        entries.append(
            MultiFileEntry(
                output_path=output_path,
                content=postprocess(_inner_content(element), dedent=dedent, trim=trim),
                dedent=dedent,
                trim=trim,
            )
        )

    return entries
