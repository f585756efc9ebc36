"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer


def parse_path(value: str) -> Path:
    """Parse a path option, defaulting to the current directory."""
    return Path(value) if value else Path.cwd()


def parse_optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


def parse_extension(value: str, option_name: str) -> str:
    """Parse a file extension, accepting an optional leading dot."""
    extension = value.strip().lstrip(".")
    if not extension:
        raise typer.BadParameter(f"Invalid extension: {value!r}", param_hint=option_name)
    if "/" in extension or "\\" in extension:
        raise typer.BadParameter(
            f"Extension must not contain path separators: {value!r}",
            param_hint=option_name,
        )
    return extension


def parse_concurrency(value: int) -> int:
    if value < 1:
        raise typer.BadParameter(
            f"Must be a positive integer, got: {value}", param_hint="--concurrency"
        )
    return value
