"""Unit tests for StyleFileLoader."""

from pathlib import Path

import pytest

from markdown_style_linter.domain.directives import EnableAll, EnableTag, ExcludeRule, ExcludeTag, SetRule
from markdown_style_linter.domain.errors import ConfigurationError, StyleSyntaxError
from markdown_style_linter.infrastructure.style_file_loader import StyleFileLoader


@pytest.fixture
def loader() -> StyleFileLoader:
    return StyleFileLoader()


class TestParse:
    def test_sample_style(self, loader: StyleFileLoader, sample_style: str, sample_directives) -> None:
        assert loader.parse(sample_style) == sample_directives

    def test_comments_and_blank_lines(self, loader: StyleFileLoader) -> None:
        text = "# house style\n\nall  # everything\nexclude_rule 'MD012' # noisy\n"
        assert loader.parse(text) == [EnableAll(), ExcludeRule("MD012")]

    def test_keyword_params_and_symbols(self, loader: StyleFileLoader) -> None:
        directives = loader.parse('rule "MD003", style: :atx\nrule \'MD026\', :punctuation => ".,;#"\n')
        assert directives == [
            SetRule("MD003", params={"style": "atx"}),
            SetRule("MD026", params={"punctuation": ".,;#"}),
        ]

    def test_rule_without_params(self, loader: StyleFileLoader) -> None:
        assert loader.parse("rule 'MD040'\n") == [SetRule("MD040")]

    def test_value_types(self, loader: StyleFileLoader) -> None:
        (directive,) = loader.parse("rule 'MD013', :line_length => -3, :code_blocks => true, :ratio => 1.5\n")
        assert directive.params == {"line_length": -3, "code_blocks": True, "ratio": 1.5}

    def test_parenthesised_call(self, loader: StyleFileLoader) -> None:
        assert loader.parse("rule('MD009', :br_spaces => 2)\n") == [SetRule("MD009", params={"br_spaces": 2})]

    def test_tags(self, loader: StyleFileLoader) -> None:
        assert loader.parse("tag :whitespace\nexclude_tag :headers, 'code'\n") == [
            EnableTag("whitespace"),
            ExcludeTag("headers"),
            ExcludeTag("code"),
        ]


class TestSyntaxErrors:
    """Malformed lines name the source and line number."""

    @pytest.mark.parametrize(
        "line",
        [
            "enable 'MD001'",
            "all 'MD001'",
            "rule",
            "rule 'MD013', line_length",
            "rule 'MD013', :line_length => big",
            "exclude_rule 'MD012",
            "rule 'MD013',, :x => 1",
        ],
    )
    def test_rejected(self, loader: StyleFileLoader, line: str) -> None:
        with pytest.raises(StyleSyntaxError) as exc_info:
            loader.parse(f"all\n{line}\n", source="style.rb")
        assert exc_info.value.line_no == 2
        assert str(exc_info.value).startswith("style.rb:2:")


def test_load_reads_file(tmp_path: Path, loader: StyleFileLoader, sample_style: str, sample_directives) -> None:
    path = tmp_path / ".mdl.rb"
    path.write_text(sample_style, encoding="utf-8")
    assert loader.load(str(path)) == sample_directives


def test_load_strips_byte_order_mark(tmp_path: Path, loader: StyleFileLoader, sample_style: str, sample_directives) -> None:
    path = tmp_path / ".mdl.rb"
    path.write_bytes(b"\xef\xbb\xbf" + sample_style.encode("utf-8"))
    assert loader.load(str(path)) == sample_directives


class TestUnreadableStyleFile:
    """Read failures surface as configuration errors naming the file."""

    def test_invalid_utf8(self, tmp_path: Path, loader: StyleFileLoader) -> None:
        path = tmp_path / "latin1.rb"
        path.write_bytes(b"all\n\xff\n")
        with pytest.raises(ConfigurationError, match="latin1.rb"):
            loader.load(str(path))

    def test_directory(self, tmp_path: Path, loader: StyleFileLoader) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read style file"):
            loader.load(str(tmp_path))
