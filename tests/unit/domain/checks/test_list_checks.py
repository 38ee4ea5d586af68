"""List rules."""

from markdown_style_linter.domain.checks.lists import list_groups
from markdown_style_linter.domain.document import parse


def lines(found) -> list[int]:
    return [v.line for v in found]


def test_list_groups_split_on_other_blocks() -> None:
    doc = parse("- a\n- b\n\nText\n\n1. c\n")
    groups = list_groups(doc)
    assert [[b.start for b in g] for g in groups] == [[1, 2], [6]]


class TestBulletStyle:
    """MD004."""

    def test_consistent_marker(self, run_check) -> None:
        found = run_check("MD004", "- a\n* b\n")
        assert lines(found) == [2]
        assert "Expected: dash; Actual: asterisk" in found[0].message

    def test_fixed_marker(self, run_check) -> None:
        assert lines(run_check("MD004", "- a\n", style="asterisk")) == [1]
        assert run_check("MD004", "* a\n* b\n", style="asterisk") == []

    def test_sublist_must_change_marker(self, run_check) -> None:
        assert lines(run_check("MD004", "- a\n  - b\n", style="sublist")) == [2]
        assert run_check("MD004", "- a\n  * b\n", style="sublist") == []


class TestListIndentation:
    def test_same_level_different_indent(self, run_check) -> None:
        assert lines(run_check("MD005", "- a\n  - b\n - c\n")) == [3]

    def test_bullets_start_left(self, run_check) -> None:
        assert lines(run_check("MD006", "  - a\n")) == [1]
        assert run_check("MD006", "- a\n") == []

    def test_nested_bullet_indent(self, run_check) -> None:
        assert lines(run_check("MD007", "- a\n    - b\n")) == [2]
        assert run_check("MD007", "- a\n  - b\n") == []
        assert run_check("MD007", "- a\n    - b\n", indent=4) == []


class TestOrderedPrefix:
    """MD029."""

    def test_one_style(self, run_check) -> None:
        assert lines(run_check("MD029", "1. a\n2. b\n", style="one")) == [2]
        assert run_check("MD029", "1. a\n1. b\n", style="one") == []

    def test_ordered_style(self, run_check) -> None:
        assert lines(run_check("MD029", "1. a\n1. b\n", style="ordered")) == [2]
        assert run_check("MD029", "0. a\n1. b\n2. c\n", style="ordered") == []

    def test_one_or_ordered(self, run_check) -> None:
        assert run_check("MD029", "1. a\n1. b\n", style="one_or_ordered") == []
        assert run_check("MD029", "1. a\n2. b\n", style="one_or_ordered") == []
        assert lines(run_check("MD029", "1. a\n3. b\n", style="one_or_ordered")) == [2]


class TestListSpacing:
    def test_marker_space(self, run_check) -> None:
        assert lines(run_check("MD030", "-  a\n")) == [1]
        assert run_check("MD030", "- a\n") == []
        assert run_check("MD030", "1.  a\n", ol_single=2) == []

    def test_blank_lines_around_lists(self, run_check) -> None:
        assert lines(run_check("MD032", "Text\n- a\n")) == [2]
        assert run_check("MD032", "Text\n\n- a\n\nMore\n") == []
