"""Heading rules."""

import re
from typing import Mapping, Optional

from markdown_style_linter.domain.checks.params import bool_param, int_param, str_param
from markdown_style_linter.domain.document import Block, BlockKind, Document
from markdown_style_linter.domain.rules import Violation

_EMPHASIS_LINE_RE = re.compile(r"^(\*\*|__|\*|_)(?=\S)([^*_]+?)(?<=\S)\1$")


def _atx_gaps(block: Block, text: str) -> tuple[int, int]:
    """Whitespace after the opening hashes and before the closing hashes."""
    body = text.lstrip()[block.heading_level:]
    opening = len(body) - len(body.lstrip())
    closing = 0
    if block.heading_style == "atx_closed":
        before = body.rstrip().rstrip("#")
        closing = len(before) - len(before.rstrip())
    return opening, closing


def header_increment(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD001"""
    found: list[Violation] = []
    previous: Optional[int] = None
    for block in doc.headings():
        if previous is not None and block.heading_level > previous + 1:
            found.append(
                Violation(
                    "MD001",
                    block.start,
                    "Header levels should only increment by one level at a time "
                    f"[Expected: h{previous + 1}; Actual: h{block.heading_level}]",
                )
            )
        previous = block.heading_level
    return found


def first_header_h1(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD002"""
    level = int_param(params, "level")
    headings = doc.headings()
    if headings and headings[0].heading_level != level:
        first = headings[0]
        return [
            Violation(
                "MD002",
                first.start,
                f"First header should be a top level header [Expected: h{level}; Actual: h{first.heading_level}]",
            )
        ]
    return []


def header_style(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD003: heading style is consistent or matches the configured style."""
    style = str_param(params, "style")
    headings = doc.headings()
    if not headings:
        return []
    found: list[Violation] = []
    for block in headings:
        if style == "consistent":
            expected = headings[0].heading_style
        elif style in ("setext_with_atx", "setext_with_atx_closed"):
            expected = "setext" if block.heading_level <= 2 else style[len("setext_with_"):]
        else:
            expected = style
        if block.heading_style != expected:
            found.append(
                Violation(
                    "MD003",
                    block.start,
                    f"Header style [Expected: {expected}; Actual: {block.heading_style}]",
                )
            )
    return found


def no_missing_space_atx(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD018"""
    found: list[Violation] = []
    for block in doc.headings():
        if block.heading_style != "atx" or not block.heading_text:
            continue
        opening, _ = _atx_gaps(block, doc.line(block.start).text)
        if opening == 0:
            found.append(Violation("MD018", block.start, "No space after hash on atx style header"))
    return found


def no_multiple_space_atx(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD019"""
    found: list[Violation] = []
    for block in doc.headings():
        if block.heading_style != "atx":
            continue
        opening, _ = _atx_gaps(block, doc.line(block.start).text)
        if opening > 1:
            found.append(Violation("MD019", block.start, "Multiple spaces after hash on atx style header"))
    return found


def no_missing_space_closed_atx(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD020"""
    found: list[Violation] = []
    for block in doc.headings():
        if block.heading_style != "atx_closed":
            continue
        opening, closing = _atx_gaps(block, doc.line(block.start).text)
        if opening == 0 or closing == 0:
            found.append(
                Violation("MD020", block.start, "No space inside hashes on closed atx style header")
            )
    return found


def no_multiple_space_closed_atx(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD021"""
    found: list[Violation] = []
    for block in doc.headings():
        if block.heading_style != "atx_closed":
            continue
        opening, closing = _atx_gaps(block, doc.line(block.start).text)
        if opening > 1 or closing > 1:
            found.append(
                Violation("MD021", block.start, "Multiple spaces inside hashes on closed atx style header")
            )
    return found


def _separated(neighbour: Optional[Block]) -> bool:
    return neighbour is None or neighbour.kind in (BlockKind.BLANK, BlockKind.FRONT_MATTER)


def blanks_around_headers(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD022"""
    found: list[Violation] = []
    for block in doc.headings():
        before = doc.previous_block(block)
        after = doc.next_block(block)
        if not _separated(before) or not _separated(after):
            found.append(Violation("MD022", block.start, "Headers should be surrounded by blank lines"))
    return found


def header_start_left(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD023"""
    return [
        Violation("MD023", block.start, "Headers must start at the beginning of the line")
        for block in doc.headings()
        if block.indent > 0
    ]


def no_duplicate_header(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """
    MD024: headings with identical text.

    With ``allow_different_nesting`` only headings sharing the same chain of
    parent headings are compared.
    """
    nested = bool_param(params, "allow_different_nesting")
    found: list[Violation] = []
    seen: set[tuple[tuple[str, ...], str]] = set()
    parents: list[tuple[int, str]] = []
    for block in doc.headings():
        while parents and parents[-1][0] >= block.heading_level:
            parents.pop()
        scope = tuple(text for _lvl, text in parents) if nested else ()
        key = (scope, block.heading_text)
        if key in seen:
            found.append(
                Violation("MD024", block.start, f"Multiple headers with the same content [{block.heading_text}]")
            )
        seen.add(key)
        parents.append((block.heading_level, block.heading_text))
    return found


def single_h1(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD025"""
    level = int_param(params, "level")
    tops = [b for b in doc.headings() if b.heading_level == level]
    return [
        Violation("MD025", block.start, "Multiple top level headers in the same document")
        for block in tops[1:]
    ]


def no_trailing_punctuation(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD026"""
    punctuation = str_param(params, "punctuation")
    found: list[Violation] = []
    for block in doc.headings():
        text = block.heading_text
        if text and text[-1] in punctuation:
            found.append(
                Violation("MD026", block.start, f"Trailing punctuation in header [Punctuation: '{text[-1]}']")
            )
    return found


def no_emphasis_as_header(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD036: a single-line paragraph that is entirely emphasis used in place of a heading."""
    punctuation = str_param(params, "punctuation")
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.PARAGRAPH):
        if block.start != block.end:
            continue
        text = doc.line(block.start).text.strip()
        m = _EMPHASIS_LINE_RE.match(text)
        if m and m.group(2).strip()[-1] not in punctuation:
            found.append(Violation("MD036", block.start, "Emphasis used instead of a header"))
    return found


def first_line_h1(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD041"""
    level = int_param(params, "level")
    for block in doc.blocks:
        if block.kind in (BlockKind.BLANK, BlockKind.FRONT_MATTER):
            continue
        if block.kind is BlockKind.HEADING and block.heading_level == level:
            return []
        return [Violation("MD041", block.start, "First line in file should be a top level header")]
    return []
