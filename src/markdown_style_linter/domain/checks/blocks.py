"""Rules about code blocks, blockquotes and thematic breaks."""

import re
from typing import Mapping, Optional

from markdown_style_linter.domain.checks.params import str_param
from markdown_style_linter.domain.document import Block, BlockKind, Document
from markdown_style_linter.domain.rules import Violation

_QUOTE_SPACES_RE = re.compile(r"^ {0,3}(?:> ?)*>( {2,})\S")

_CODE_STYLE_NAMES: dict[BlockKind, str] = {
    BlockKind.FENCED_CODE: "fenced",
    BlockKind.INDENTED_CODE: "indented",
}


def _code_body(doc: Document, block: Block) -> list[str]:
    """Content lines of a code block without the fences."""
    numbers = list(block.line_numbers)
    if block.kind is BlockKind.FENCED_CODE:
        numbers = numbers[1:] if block.unterminated else numbers[1:-1]
    return [doc.line(n).text for n in numbers]


def commands_show_output(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD014: every command in a code block is prefixed with ``$`` and none shows output."""
    found: list[Violation] = []
    for block in doc.code_blocks():
        content = [text.strip() for text in _code_body(doc, block) if text.strip()]
        if content and all(text.startswith("$") for text in content):
            found.append(Violation("MD014", block.start, "Dollar signs used before commands without showing output"))
    return found


def no_multiple_space_blockquote(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD027"""
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.BLOCKQUOTE):
        for number in block.line_numbers:
            m = _QUOTE_SPACES_RE.match(doc.line(number).text)
            if m:
                found.append(
                    Violation(
                        "MD027",
                        number,
                        "Multiple spaces after blockquote symbol",
                        column=m.start(1) + 1,
                    )
                )
    return found


def no_blanks_blockquote(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD028: blank lines separating two blockquotes."""
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.BLANK):
        before = doc.previous_block(block)
        after = doc.next_block(block)
        if before is None or after is None:
            continue
        if before.kind is BlockKind.BLOCKQUOTE and after.kind is BlockKind.BLOCKQUOTE:
            found.append(Violation("MD028", block.start, "Blank line inside blockquote", end_line=block.end))
    return found


def blanks_around_fences(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD031"""
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.FENCED_CODE):
        before = doc.previous_block(block)
        after = doc.next_block(block)
        if before is not None and before.kind not in (BlockKind.BLANK, BlockKind.FRONT_MATTER):
            found.append(Violation("MD031", block.start, "Fenced code blocks should be surrounded by blank lines"))
        if not block.unterminated and after is not None and after.kind is not BlockKind.BLANK:
            found.append(Violation("MD031", block.end, "Fenced code blocks should be surrounded by blank lines"))
    return found


def hr_style(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD035: thematic breaks all use the same text, or the configured one."""
    style = str_param(params, "style")
    expected: Optional[str] = None if style == "consistent" else style
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.THEMATIC_BREAK):
        actual = doc.line(block.start).text.strip()
        if expected is None:
            expected = actual
        if actual != expected:
            found.append(
                Violation("MD035", block.start, f"Horizontal rule style [Expected: {expected}; Actual: {actual}]")
            )
    return found


def fenced_code_language(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD040"""
    return [
        Violation("MD040", block.start, "Fenced code blocks should have a language specified")
        for block in doc.blocks_of(BlockKind.FENCED_CODE)
        if not block.info
    ]


def code_block_style(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD046"""
    style = str_param(params, "style")
    expected: Optional[str] = None if style == "consistent" else style
    found: list[Violation] = []
    for block in doc.code_blocks():
        actual = _CODE_STYLE_NAMES[block.kind]
        if expected is None:
            expected = actual
        if actual != expected:
            found.append(
                Violation("MD046", block.start, f"Code block style [Expected: {expected}; Actual: {actual}]")
            )
    return found
