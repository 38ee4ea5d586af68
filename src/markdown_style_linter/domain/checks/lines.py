"""Line-oriented rules: length, trailing whitespace, tabs, blank runs, final newline."""

from typing import Mapping

from markdown_style_linter.domain.checks.params import bool_param, int_param
from markdown_style_linter.domain.document import BlockKind, Document
from markdown_style_linter.domain.rules import Violation


def line_length(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD013: lines longer than ``line_length``; code, tables and headers may be exempted."""
    limit = int_param(params, "line_length")
    include_code = bool_param(params, "code_blocks")
    include_tables = bool_param(params, "tables")
    include_headers = bool_param(params, "headers")
    found: list[Violation] = []
    for line in doc.body_lines():
        length = len(line.text)
        if length <= limit:
            continue
        if line.in_code and not include_code:
            continue
        if line.kind is BlockKind.TABLE and not include_tables:
            continue
        if line.kind is BlockKind.HEADING and not include_headers:
            continue
        found.append(
            Violation(
                "MD013",
                line.number,
                f"Line length [Expected: {limit}; Actual: {length}]",
                column=limit + 1,
            )
        )
    return found


def trailing_spaces(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """
    MD009: trailing whitespace.

    With ``br_spaces`` of 2 or more, a content line ending in exactly that
    many spaces is a hard line break and is allowed. Any other amount, and
    any trailing tab, is reported.
    """
    br_spaces = int_param(params, "br_spaces")
    found: list[Violation] = []
    for line in doc.body_lines():
        stripped = line.text.rstrip()
        trailing = line.text[len(stripped):]
        if not trailing:
            continue
        if br_spaces >= 2 and stripped and trailing == " " * br_spaces:
            continue
        expected = f"0 or {br_spaces}" if br_spaces >= 2 else "0"
        found.append(
            Violation(
                "MD009",
                line.number,
                f"Trailing spaces [Expected: {expected}; Actual: {len(trailing)}]",
                column=len(stripped) + 1,
            )
        )
    return found


def hard_tabs(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD010"""
    skip_code = bool_param(params, "ignore_code_blocks")
    found: list[Violation] = []
    for line in doc.body_lines():
        if skip_code and line.in_code:
            continue
        col = line.text.find("\t")
        if col >= 0:
            found.append(Violation("MD010", line.number, "Hard tabs", column=col + 1))
    return found


def multiple_blanks(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """
    MD012: runs of blank lines longer than ``maximum``.

    Blank lines inside code blocks belong to the code block and are never
    counted. One violation covers the excess part of each run.
    """
    maximum = int_param(params, "maximum")
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.BLANK):
        run = block.end - block.start + 1
        if run > maximum:
            first_excess = block.start + maximum
            found.append(
                Violation(
                    "MD012",
                    first_excess,
                    f"Multiple consecutive blank lines [Expected: {maximum}; Actual: {run}]",
                    end_line=block.end,
                )
            )
    return found


def single_trailing_newline(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD047"""
    if not doc.lines or doc.ends_with_newline:
        return []
    last = doc.lines[-1]
    return [
        Violation(
            "MD047",
            last.number,
            "File should end with a single newline character",
            column=len(last.text) + 1,
        )
    ]
