"""Unit tests for FileSystemGateway."""

from pathlib import Path

import pytest

from markdown_style_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


@pytest.fixture
def gateway() -> FileSystemGateway:
    return FileSystemGateway()


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    for rel in ("README.md", "docs/b.markdown", "docs/a.MD", "docs/notes.txt", "vendor/lib/x.md"):
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("# x\n", encoding="utf-8")
    return tmp_path


class TestGlobMarkdownFiles:
    def test_directory_walk_is_sorted_and_filtered(self, gateway: FileSystemGateway, tree: Path) -> None:
        found = gateway.glob_markdown_files(str(tree), [".md", ".markdown"])
        rel = [Path(p).relative_to(tree).as_posix() for p in found]
        assert rel == ["README.md", "docs/a.MD", "docs/b.markdown", "vendor/lib/x.md"]

    def test_exclude_fragments(self, gateway: FileSystemGateway, tree: Path) -> None:
        found = gateway.glob_markdown_files(str(tree), [".md"], exclude=["/vendor/"])
        rel = [Path(p).relative_to(tree).as_posix() for p in found]
        assert rel == ["README.md", "docs/a.MD"]

    def test_explicit_file_is_kept_whatever_its_suffix(self, gateway: FileSystemGateway, tree: Path) -> None:
        target = str(tree / "docs" / "notes.txt")
        assert gateway.glob_markdown_files(target, [".md"]) == [target]


def test_read_text_keeps_line_endings(gateway: FileSystemGateway, tmp_path: Path) -> None:
    path = tmp_path / "crlf.md"
    path.write_bytes(b"# Title\r\n\r\ntext\r\n")
    assert gateway.read_text(str(path)) == "# Title\r\n\r\ntext\r\n"


def test_exists(gateway: FileSystemGateway, tree: Path) -> None:
    assert gateway.exists(str(tree / "README.md"))
    assert gateway.exists(str(tree / "docs"))
    assert not gateway.exists(str(tree / "missing.md"))
