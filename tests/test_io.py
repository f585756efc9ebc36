from pathlib import Path

import pytest

from batchrender.core.errors import WriteError
from batchrender.rendering.io import atomic_write_text, resolve_output_path, write_output


class TestResolveOutputPath:
    def test_relative_path_is_joined(self, tmp_path: Path) -> None:
        assert resolve_output_path(tmp_path, "a/b.txt") == tmp_path / "a" / "b.txt"

    def test_absolute_path_is_rerooted(self, tmp_path: Path) -> None:
        assert resolve_output_path(tmp_path, "/etc/out.txt") == tmp_path / "etc" / "out.txt"


class TestAtomicWriteText:
    def test_creates_parents_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "deep" / "er" / "file.txt"

        atomic_write_text(target, "content")

        assert target.read_text(encoding="utf-8") == "content"
        assert [p.name for p in target.parent.iterdir()] == ["file.txt"]

    def test_applies_mode(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"

        atomic_write_text(target, "x", mode=0o600)

        assert target.stat().st_mode & 0o777 == 0o600


@pytest.mark.anyio
class TestWriteOutput:
    async def test_writes_below_output_root(self, tmp_path: Path) -> None:
        written = await write_output(tmp_path, "notes/readme.md", "# Readme\n")

        assert written == tmp_path / "notes" / "readme.md"
        assert written.read_text(encoding="utf-8") == "# Readme\n"

    async def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("old")

        await write_output(tmp_path, "a.txt", "new")

        assert target.read_text(encoding="utf-8") == "new"

    async def test_keeps_unicode(self, tmp_path: Path) -> None:
        written = await write_output(tmp_path, "u.txt", "héllo ✓")
        assert written.read_text(encoding="utf-8") == "héllo ✓"

    async def test_io_failure_is_write_error(self, tmp_path: Path) -> None:
        (tmp_path / "blocker").write_text("not a directory")

        with pytest.raises(WriteError, match="Failed to write"):
            await write_output(tmp_path, "blocker/file.txt", "x")
