from pathlib import Path, PurePosixPath
from typing import Callable

import pytest

from batchrender.core.errors import (
    DuplicateTemplateKeyError,
    InvalidInputError,
    NoInputError,
)
from batchrender.rendering import TemplateRenderer, discover_templates
from batchrender.rendering.discovery import is_ignored, template_key

WriteTree = Callable[[dict[str, str]], Path]


class TestTemplateKey:
    def test_strips_only_last_extension(self) -> None:
        assert template_key(PurePosixPath("a/b.multi.edge")) == "a/b.multi"

    def test_top_level_file(self) -> None:
        assert template_key(PurePosixPath("index.edge")) == "index"

    def test_strips_whole_dotted_extension(self) -> None:
        assert template_key(PurePosixPath("docs/page.html.j2"), "html.j2") == "docs/page"
        assert template_key(PurePosixPath("site.multi.html.j2"), ".html.j2") == "site.multi"


class TestIsIgnored:
    @pytest.mark.parametrize(
        "path",
        [".hidden.edge", "_private.edge", "_partials/nav.edge", "a/.cache/x.edge"],
    )
    def test_ignored(self, path: str) -> None:
        assert is_ignored(PurePosixPath(path))

    @pytest.mark.parametrize("path", ["ok.edge", "docs/page_1.edge", "a.b/c.edge"])
    def test_not_ignored(self, path: str) -> None:
        assert not is_ignored(PurePosixPath(path))


class TestDiscoverDirectory:
    def test_classifies_multi_templates(self, write_tree: WriteTree) -> None:
        root = write_tree({"a/b.multi.edge": "", "a/c.edge": ""})

        templates = discover_templates(root)

        assert [(t.key, t.is_multi) for t in templates] == [
            ("a/b.multi", True),
            ("a/c", False),
        ]
        assert templates[0].source_path == root / "a" / "b.multi.edge"

    def test_excludes_hidden_and_private(self, write_tree: WriteTree) -> None:
        root = write_tree(
            {
                ".hidden.edge": "",
                "_private.edge": "",
                "ok.edge": "",
                "_layouts/base.edge": "",
                ".git/x.edge": "",
            }
        )

        templates = discover_templates(root)

        assert [t.key for t in templates] == ["ok"]

    def test_filters_by_extension(self, write_tree: WriteTree) -> None:
        root = write_tree({"a.edge": "", "b.j2": "", "c.edge.bak": "", "d/e.j2": ""})

        assert [t.key for t in discover_templates(root, "j2")] == ["b", "d/e"]
        assert [t.key for t in discover_templates(root, ".j2")] == ["b", "d/e"]

    def test_dotted_extension(self, write_tree: WriteTree) -> None:
        root = write_tree(
            {"page.html.j2": "", "feed.xml.j2": "", "docs/all.multi.html.j2": ""}
        )

        templates = discover_templates(root, "html.j2")

        assert [(t.key, t.is_multi) for t in templates] == [
            ("docs/all.multi", True),
            ("page", False),
        ]

    def test_results_are_sorted_by_key(self, write_tree: WriteTree) -> None:
        root = write_tree({"z.edge": "", "a/z.edge": "", "m.edge": ""})

        assert [t.key for t in discover_templates(root)] == ["a/z", "m", "z"]

    def test_no_templates_found(self, write_tree: WriteTree) -> None:
        root = write_tree({"_only_private.edge": "", "readme.md": ""})

        with pytest.raises(NoInputError):
            discover_templates(root)

    def test_rejects_case_insensitive_duplicates(self, write_tree: WriteTree) -> None:
        root = write_tree({"Readme.edge": ""})
        if (root / "readme.edge").exists():
            pytest.skip("filesystem is case-insensitive")
        write_tree({"readme.edge": ""})

        with pytest.raises(DuplicateTemplateKeyError, match="same key"):
            discover_templates(root)


class TestDiscoverFile:
    def test_single_file_is_never_multi(self, tmp_path: Path) -> None:
        path = tmp_path / "page.multi.edge"
        path.write_text("")

        templates = discover_templates(path)

        assert len(templates) == 1
        assert templates[0].key == "page.multi"
        assert templates[0].is_multi is False
        assert templates[0].source_path == path

    def test_single_file_ignores_extension_filter(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("")

        assert [t.key for t in discover_templates(path, "edge")] == ["notes"]


class TestDiscoverInvalidInput:
    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidInputError, match="file or directory"):
            discover_templates(tmp_path / "missing")


class TestDiscoverRegistersWithRenderer:
    @pytest.mark.anyio
    async def test_directory_is_mounted(self, write_tree: WriteTree) -> None:
        root = write_tree({"docs/page.edge": "Hello {{ name }}"})
        renderer = TemplateRenderer()

        discover_templates(root, renderer=renderer)

        assert await renderer.render("docs/page", {"name": "World"}) == "Hello World"

    @pytest.mark.anyio
    async def test_single_file_is_registered(self, tmp_path: Path) -> None:
        path = tmp_path / "greeting.txt"
        path.write_text("Hi {{ name }}!")
        renderer = TemplateRenderer()

        discover_templates(path, renderer=renderer)

        assert await renderer.render("greeting", {"name": "Ada"}) == "Hi Ada!"
