"""File I/O operations for rendering."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path, PurePath

import anyio.to_thread

from ..core.errors import WriteError

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            with contextlib.suppress(OSError):
                os.remove(tmp_name)


def resolve_output_path(output_root: Path, path: str | PurePath) -> Path:
    """Join an output path onto the output root.

    Absolute paths are re-rooted under ``output_root``.
    """
    relative = PurePath(path)
    if relative.anchor:
        relative = relative.relative_to(relative.anchor)
    return output_root / relative


async def write_output(
    output_root: Path,
    path: str | PurePath,
    content: str,
    *,
    source: str | PurePath | None = None,
    mode: int = 0o644,
) -> Path:
    """Write generated content below the output root, replacing any existing file.

    Args:
        output_root: Base output directory
        path: Output path, relative to ``output_root``
        content: Text to write
        source: Template the content was generated from, for logging
        mode: File permissions (octal)

    Returns:
        Written file path
    """
    final_path = resolve_output_path(output_root, path)
    logger.info(f"Generating file: {source or '<unknown>'} -> {PurePath(path).as_posix()}")
    try:
        await anyio.to_thread.run_sync(atomic_write_text, final_path, content, mode)
    except OSError as e:
        raise WriteError(f"Failed to write {final_path}: {e}") from e
    return final_path
