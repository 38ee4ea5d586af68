"""Rules over inline constructs: links, URLs, HTML, emphasis and code spans."""

import re
from typing import Iterator, Mapping

from markdown_style_linter.domain.checks.params import str_param
from markdown_style_linter.domain.document import BlockKind, Document, InlineSpan, Line, mask_code_spans
from markdown_style_linter.domain.rules import Violation

_REVERSED_LINK_RE = re.compile(r"\(([^()\s][^()]*)\)\[([^\[\]]+)\]")
_BARE_URL_RE = re.compile(r"(?:https?|ftp)://[^\s<>\[\]()`]+", re.IGNORECASE)
_ELEMENT_RE = re.compile(r"</?([A-Za-z][A-Za-z0-9-]*)")
_EMPHASIS_BODY_RE = re.compile(r"(?<![\w*_\\])(\*\*|__|\*|_)([^*_\n]*?)\1(?![\w*_])")

_PROSE_KINDS = frozenset(
    {BlockKind.PARAGRAPH, BlockKind.HEADING, BlockKind.LIST_ITEM, BlockKind.BLOCKQUOTE, BlockKind.TABLE}
)


def _prose_lines(doc: Document) -> Iterator[Line]:
    for line in doc.lines:
        if line.kind in _PROSE_KINDS and not line.is_blank:
            yield line


def _content(doc: Document, line: Line) -> tuple[str, int]:
    """Line text after any list marker, with its column offset."""
    block = doc.blocks[line.block_index]
    if block.kind is BlockKind.LIST_ITEM and not block.continuation and line.number == block.start:
        offset = min(block.content_indent, len(line.text))
        return line.text[offset:], offset
    return line.text, 0


def no_reversed_links(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD011"""
    found: list[Violation] = []
    for line in _prose_lines(doc):
        for m in _REVERSED_LINK_RE.finditer(mask_code_spans(line.text)):
            found.append(
                Violation("MD011", line.number, f"Reversed link syntax [{m.group(0)}]", column=m.start() + 1)
            )
    return found


def _allowed(params: Mapping[str, object]) -> set[str]:
    raw = str_param(params, "allowed_elements")
    return {name.lower() for name in re.split(r"[\s,]+", raw) if name}


def no_inline_html(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """
    MD033: raw HTML.

    HTML blocks are reported once on their first line; inline HTML once per
    opening tag. Comments and the elements listed in ``allowed_elements``
    are accepted.
    """
    allowed = _allowed(params)
    found: list[Violation] = []
    for block in doc.blocks_of(BlockKind.HTML):
        first = doc.line(block.start).text
        m = _ELEMENT_RE.search(first)
        if m and m.group(1).lower() not in allowed:
            found.append(Violation("MD033", block.start, f"Inline HTML [Element: {m.group(1)}]", column=m.start() + 1))
    for line in _prose_lines(doc):
        for span in doc.inline_spans(line.number):
            if span.kind != "html" or span.text.startswith("</"):
                continue
            name = _ELEMENT_RE.match(span.text)
            if name and name.group(1).lower() not in allowed:
                found.append(
                    Violation("MD033", line.number, f"Inline HTML [Element: {name.group(1)}]", column=span.start + 1)
                )
    return found


def _covered(start: int, end: int, spans: tuple[InlineSpan, ...]) -> bool:
    return any(s.kind in ("link", "autolink", "html") and s.start <= start and end <= s.end for s in spans)


def no_bare_urls(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD034"""
    found: list[Violation] = []
    for line in _prose_lines(doc):
        spans = doc.inline_spans(line.number)
        masked = mask_code_spans(line.text, list(spans))
        for m in _BARE_URL_RE.finditer(masked):
            if not _covered(m.start(), m.end(), spans):
                found.append(
                    Violation("MD034", line.number, f"Bare URL used [{m.group(0)}]", column=m.start() + 1)
                )
    return found


def no_space_in_emphasis(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD037"""
    found: list[Violation] = []
    for line in _prose_lines(doc):
        text, offset = _content(doc, line)
        for m in _EMPHASIS_BODY_RE.finditer(mask_code_spans(text)):
            inner = m.group(2)
            if inner.strip() and inner != inner.strip():
                found.append(
                    Violation(
                        "MD037",
                        line.number,
                        f"Spaces inside emphasis markers [{m.group(0)}]",
                        column=offset + m.start() + 1,
                    )
                )
    return found


def no_space_in_code(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD038: code spans padded with spaces, unless the padding protects a backtick."""
    found: list[Violation] = []
    for line in _prose_lines(doc):
        for span in doc.inline_spans(line.number):
            if span.kind != "code":
                continue
            inner = span.text.strip()
            if not inner or inner == span.text:
                continue
            if inner.startswith("`") or inner.endswith("`"):
                continue
            found.append(
                Violation("MD038", line.number, "Spaces inside code span elements", column=span.start + 1)
            )
    return found


def no_space_in_links(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD039"""
    found: list[Violation] = []
    for line in _prose_lines(doc):
        for span in doc.inline_spans(line.number):
            if span.kind == "link" and span.text.strip() and span.text != span.text.strip():
                found.append(
                    Violation("MD039", line.number, "Spaces inside link text", column=span.start + 1)
                )
    return found
