"""Loading of JSON and YAML context files."""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any

import anyio
import yaml

from ..core.errors import ParseError, ReadError, UnsupportedFormatError
from ..core.models import Context, ContextValue

logger = logging.getLogger(__name__)

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _normalize(value: Any, where: str) -> ContextValue:
    """Coerce a parsed value onto the context value types.

    Args:
        value: Parsed JSON or YAML value
        where: Dotted location of the value, used in error messages

    Returns:
        Normalized value
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return _normalize_mapping(value, where)
    if isinstance(value, (list, tuple)):
        return [_normalize(v, f"{where}[{i}]") for i, v in enumerate(value)]
    raise ParseError(f"Unsupported value of type {type(value).__name__} at {where!r}")


def _normalize_mapping(mapping: dict[Any, Any], where: str) -> dict[str, ContextValue]:
    """Normalize a mapping, converting its keys to strings.

    Keys that only become equal once converted, such as ``1`` and ``"1"``,
    are rejected.
    """
    result: dict[str, ContextValue] = {}
    for k, v in mapping.items():
        key = str(k)
        location = f"{where}.{key}" if where else key
        if key in result:
            raise ParseError(f"Duplicate key after string conversion at {location!r}")
        result[key] = _normalize(v, location)
    return result


def parse_context(text: str, path: Path) -> Context:
    """Parse context file content, selecting the format by file extension.

    Args:
        text: Raw file content
        path: Path the content was read from

    Returns:
        Parsed context mapping
    """
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            raise ParseError(f"Failed to parse context file as json: {path}: {e}") from e
    elif suffix in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse context file as yaml: {path}: {e}") from e
        if data is None:
            data = {}
    else:
        raise UnsupportedFormatError(f"Unsupported context file extension: {path}")

    if not isinstance(data, dict):
        raise ParseError(
            f"Context file must contain a mapping at top level, "
            f"got {type(data).__name__}: {path}"
        )

    try:
        return _normalize_mapping(data, "")
    except ParseError as e:
        raise ParseError(f"Invalid context file: {path}: {e}") from e


async def load_context(path: Path | None) -> Context:
    """Load a context file.

    Args:
        path: Context file path, or None for an empty context

    Returns:
        Parsed context mapping
    """
    if path is None:
        return {}

    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES | YAML_SUFFIXES:
        raise UnsupportedFormatError(f"Unsupported context file extension: {path}")

    logger.debug(f"Loading context file: {path}")
    try:
        text = await anyio.Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read context file: {path}: {e}") from e

    return parse_context(text, path)
