"""Template discovery and key derivation."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from ..core.errors import (
    DuplicateTemplateKeyError,
    InvalidInputError,
    NoInputError,
)
from ..core.models import TemplateRef
from .engine import TemplateRenderer

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "edge"
MULTI_SUFFIX = ".multi"
IGNORED_PREFIXES = (".", "_")


def is_ignored(relative_path: PurePath) -> bool:
    """Return True when the file or any of its directories is hidden or private."""
    return any(part.startswith(IGNORED_PREFIXES) for part in relative_path.parts)


def template_key(relative_path: PurePath, extension: str = DEFAULT_EXTENSION) -> str:
    """Derive the template key: the relative path without the template extension.

    The whole configured extension is removed, so ``page.html.j2`` with
    extension ``html.j2`` yields ``page``.
    """
    key = relative_path.as_posix()
    suffix = f".{extension.lstrip('.')}"
    if key.endswith(suffix):
        return key[: -len(suffix)]
    return relative_path.with_suffix("").as_posix()


def _check_unique(templates: list[TemplateRef]) -> None:
    seen: dict[str, TemplateRef] = {}
    for template in templates:
        folded = template.key.casefold()
        other = seen.get(folded)
        if other is not None:
            raise DuplicateTemplateKeyError(
                f"Templates {other.source_path} and {template.source_path} "
                f"resolve to the same key: {template.key!r}"
            )
        seen[folded] = template


def _discover_file(
    input_path: Path, renderer: TemplateRenderer | None
) -> list[TemplateRef]:
    key = input_path.stem
    if renderer is not None:
        try:
            source = input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"Failed to read template: {input_path}: {e}") from e
        renderer.register_template(key, source)
    # Multi-output templates are only supported in directory mode
    return [TemplateRef(key=key, source_path=input_path, is_multi=False)]


def _discover_directory(
    input_path: Path, extension: str, renderer: TemplateRenderer | None
) -> list[TemplateRef]:
    if renderer is not None:
        renderer.mount(input_path)

    templates: list[TemplateRef] = []
    for path in input_path.rglob(f"*.{extension}"):
        if not path.is_file():
            continue
        relative = path.relative_to(input_path)
        if is_ignored(relative):
            logger.debug(f"Ignoring template: {relative.as_posix()}")
            continue
        key = template_key(relative, extension)
        templates.append(
            TemplateRef(key=key, source_path=path, is_multi=key.endswith(MULTI_SUFFIX))
        )

    templates.sort(key=lambda t: t.key)
    return templates


def discover_templates(
    input_path: Path,
    extension: str = DEFAULT_EXTENSION,
    renderer: TemplateRenderer | None = None,
) -> list[TemplateRef]:
    """Discover templates under an input file or directory.

    Args:
        input_path: Template file or directory to scan recursively
        extension: Template file extension, with or without a leading dot
        renderer: Renderer to mount the directory on, or to register the
            single template with

    Returns:
        Discovered templates, sorted by key
    """
    extension = extension.lstrip(".")

    if input_path.is_dir():
        templates = _discover_directory(input_path, extension, renderer)
    elif input_path.is_file():
        templates = _discover_file(input_path, renderer)
    else:
        raise InvalidInputError(
            f"Expected input to be file or directory: {input_path}"
        )

    if not templates:
        raise NoInputError(f"No templates could be found in {input_path}")

    _check_unique(templates)
    logger.debug(f"Discovered {len(templates)} template(s) in {input_path}")
    return templates
