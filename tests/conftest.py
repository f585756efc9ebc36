from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Return a function that creates files below a fresh template root."""
    root = tmp_path / "templates"
    root.mkdir()

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write
