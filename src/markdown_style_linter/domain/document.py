"""Document Model: parse raw markdown into immutable lines, blocks and inline spans.

``parse`` is total. Malformed structure never raises: an unterminated fence
runs to the end of the document and is flagged instead.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class BlockKind(str, Enum):
    """Structural kind shared by every line of a block."""

    BLANK = "blank"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    FENCED_CODE = "fenced_code"
    INDENTED_CODE = "indented_code"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    THEMATIC_BREAK = "thematic_break"
    HTML = "html"
    TABLE = "table"
    FRONT_MATTER = "front_matter"


CODE_KINDS: frozenset[BlockKind] = frozenset({BlockKind.FENCED_CODE, BlockKind.INDENTED_CODE})

_FENCE_RE = re.compile(r"^(\s*)(`{3,}|~{3,})(.*)$")
_ATX_RE = re.compile(r"^( {0,3})(#{1,6})(?!#)(.*)$")
_SETEXT_RE = re.compile(r"^ {0,3}(=+|-+)\s*$")
_HR_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_LIST_RE = re.compile(r"^(\s*)([-*+]|\d{1,9}[.)])([ \t]+|$)(.*)$")
_QUOTE_RE = re.compile(r"^ {0,3}>")
_HTML_RE = re.compile(r"^ {0,3}<(!--|/?[A-Za-z][A-Za-z0-9-]*)(?:\s|/?>|$)")
_TABLE_DELIM_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?\s*$")

_AUTOLINK_RE = re.compile(r"<(?:https?|ftp|mailto):[^\s<>]*>", re.IGNORECASE)
_INLINE_HTML_RE = re.compile(r"</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>")
_LINK_RE = re.compile(r"!?\[([^\[\]]*)\]\(([^()\s]*)(?:\s+\"[^\"]*\")?\)")
_EMPHASIS_RE = re.compile(r"(\*\*|__|\*|_)(?=\S)(.+?)(?<=\S)\1")


def expand_indent(text: str) -> int:
    """Return the indentation width of ``text`` in columns, tabs stopping every 4."""
    col = 0
    for ch in text:
        if ch == " ":
            col += 1
        elif ch == "\t":
            col += 4 - (col % 4)
        else:
            break
    return col


@dataclass(frozen=True)
class Line:
    """One physical line of the document."""

    number: int
    text: str
    kind: BlockKind
    block_index: int

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def indent(self) -> int:
        return expand_indent(self.text)

    @property
    def in_code(self) -> bool:
        return self.kind in CODE_KINDS


@dataclass(frozen=True)
class Block:
    """A contiguous run of lines of one kind. ``start`` and ``end`` are inclusive line numbers."""

    index: int
    kind: BlockKind
    start: int
    end: int
    heading_level: int = 0
    heading_style: str = ""
    heading_text: str = ""
    fence: str = ""
    info: str = ""
    unterminated: bool = False
    list_marker: str = ""
    ordered: bool = False
    ordinal: Optional[int] = None
    indent: int = 0
    content_indent: int = 0
    marker_spacing: int = 0
    list_level: int = 0
    continuation: bool = False

    @property
    def line_numbers(self) -> range:
        return range(self.start, self.end + 1)

    @property
    def is_code(self) -> bool:
        return self.kind in CODE_KINDS


@dataclass(frozen=True)
class InlineSpan:
    """An inline construct inside one line. Columns are 0-based, ``end`` exclusive."""

    kind: str
    line: int
    start: int
    end: int
    text: str
    target: str = ""


@dataclass(frozen=True)
class Document:
    """Immutable parsed markdown document."""

    lines: tuple[Line, ...] = ()
    blocks: tuple[Block, ...] = ()
    ends_with_newline: bool = True

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> Line:
        """Return the line with 1-based ``number``."""
        if number < 1 or number > len(self.lines):
            raise IndexError(f"line {number} out of range")
        return self.lines[number - 1]

    def block_of(self, number: int) -> Block:
        return self.blocks[self.line(number).block_index]

    def blocks_of(self, *kinds: BlockKind) -> Iterator[Block]:
        for block in self.blocks:
            if block.kind in kinds:
                yield block

    def headings(self) -> list[Block]:
        return list(self.blocks_of(BlockKind.HEADING))

    def list_items(self) -> list[Block]:
        return [b for b in self.blocks_of(BlockKind.LIST_ITEM) if not b.continuation]

    def code_blocks(self) -> list[Block]:
        return list(self.blocks_of(*CODE_KINDS))

    def body_lines(self) -> Iterator[Line]:
        """Every line a rule may inspect (front matter excluded)."""
        for line in self.lines:
            if line.kind is not BlockKind.FRONT_MATTER:
                yield line

    def previous_block(self, block: Block, skip_blank: bool = False) -> Optional[Block]:
        idx = block.index - 1
        while idx >= 0:
            candidate = self.blocks[idx]
            if not (skip_blank and candidate.kind is BlockKind.BLANK):
                return candidate
            idx -= 1
        return None

    def next_block(self, block: Block, skip_blank: bool = False) -> Optional[Block]:
        idx = block.index + 1
        while idx < len(self.blocks):
            candidate = self.blocks[idx]
            if not (skip_blank and candidate.kind is BlockKind.BLANK):
                return candidate
            idx += 1
        return None

    def inline_spans(self, number: int) -> tuple[InlineSpan, ...]:
        """Inline spans of a line; empty for code, HTML and front matter lines."""
        line = self.line(number)
        if line.in_code or line.kind in (BlockKind.HTML, BlockKind.FRONT_MATTER):
            return ()
        return scan_inline(number, line.text)

    def text(self) -> str:
        body = "\n".join(line.text for line in self.lines)
        return body + "\n" if self.lines and self.ends_with_newline else body


def scan_inline(number: int, text: str) -> tuple[InlineSpan, ...]:
    """Find code spans, links, autolinks, inline HTML and emphasis in one line."""
    spans: list[InlineSpan] = list(_code_spans(number, text))
    masked = mask_code_spans(text, spans)
    for m in _AUTOLINK_RE.finditer(masked):
        spans.append(InlineSpan("autolink", number, m.start(), m.end(), m.group(0)[1:-1]))
    taken = [(s.start, s.end) for s in spans]
    for m in _INLINE_HTML_RE.finditer(masked):
        if not _overlaps(m.start(), m.end(), taken):
            spans.append(InlineSpan("html", number, m.start(), m.end(), m.group(0)))
    for m in _LINK_RE.finditer(masked):
        spans.append(InlineSpan("link", number, m.start(), m.end(), m.group(1), m.group(2)))
    for m in _EMPHASIS_RE.finditer(masked):
        spans.append(InlineSpan("emphasis", number, m.start(), m.end(), m.group(2), m.group(1)))
    spans.sort(key=lambda s: (s.start, s.end, s.kind))
    return tuple(spans)


def mask_code_spans(text: str, spans: Optional[list[InlineSpan]] = None) -> str:
    """Blank out code span contents (markers included) while keeping columns stable."""
    if spans is None:
        spans = list(_code_spans(0, text))
    chars = list(text)
    for span in spans:
        if span.kind == "code":
            for i in range(span.start, span.end):
                chars[i] = " "
    return "".join(chars)


def _code_spans(number: int, text: str) -> Iterator[InlineSpan]:
    i = 0
    n = len(text)
    while i < n:
        if text[i] != "`":
            i += 1
            continue
        run_end = i
        while run_end < n and text[run_end] == "`":
            run_end += 1
        ticks = run_end - i
        j = run_end
        close = -1
        while j < n:
            if text[j] == "`":
                k = j
                while k < n and text[k] == "`":
                    k += 1
                if k - j == ticks:
                    close = j
                    break
                j = k
            else:
                j += 1
        if close < 0:
            i = run_end
            continue
        yield InlineSpan("code", number, i, close + ticks, text[run_end:close])
        i = close + ticks


def _overlaps(start: int, end: int, ranges: list[tuple[int, int]]) -> bool:
    return any(start < r_end and r_start < end for r_start, r_end in ranges)


def split_lines(raw_text: str) -> tuple[list[str], bool]:
    """Split text on any newline convention. Returns (lines, ends_with_newline)."""
    if not raw_text:
        return [], True
    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    ends = text.endswith("\n")
    parts = text.split("\n")
    if ends:
        parts.pop()
    return parts, ends


def parse(raw_text: str, front_matter: bool = False) -> Document:
    """Parse ``raw_text`` into a Document. Never raises."""
    texts, ends = split_lines(raw_text)
    raw_blocks = _BlockScanner(texts).scan(front_matter)
    blocks: list[Block] = []
    lines: list[Line] = []
    for index, (kind, start, end, meta) in enumerate(raw_blocks):
        blocks.append(Block(index=index, kind=kind, start=start + 1, end=end + 1, **meta))
        for i in range(start, end + 1):
            lines.append(Line(number=i + 1, text=texts[i], kind=kind, block_index=index))
    return Document(lines=tuple(lines), blocks=tuple(blocks), ends_with_newline=ends)


_RawBlock = tuple[BlockKind, int, int, dict[str, object]]


class _BlockScanner:
    """Single forward pass over the lines producing a partition into blocks."""

    def __init__(self, texts: list[str]) -> None:
        self.texts = texts
        self.blocks: list[_RawBlock] = []
        # Indents (marker column, content column) of the open list items, outermost first.
        self.list_stack: list[tuple[int, int]] = []

    def scan(self, front_matter: bool) -> list[_RawBlock]:
        i = 0
        if front_matter:
            i = self._front_matter()
        n = len(self.texts)
        while i < n:
            i = self._next_block(i)
        return self.blocks

    def _emit(self, kind: BlockKind, start: int, end: int, **meta: object) -> int:
        self.blocks.append((kind, start, end, meta))
        return end + 1

    def _last_content_kind(self) -> Optional[BlockKind]:
        for kind, _s, _e, _m in reversed(self.blocks):
            if kind is not BlockKind.BLANK:
                return kind
        return None

    def _previous_is_blank(self) -> bool:
        return not self.blocks or self.blocks[-1][0] is BlockKind.BLANK

    def _front_matter(self) -> int:
        if not self.texts or self.texts[0].strip() != "---":
            return 0
        for j in range(1, len(self.texts)):
            if self.texts[j].strip() in ("---", "..."):
                return self._emit(BlockKind.FRONT_MATTER, 0, j)
        return 0

    def _in_list_context(self) -> bool:
        return bool(self.list_stack) and self._last_content_kind() in (
            BlockKind.LIST_ITEM,
            BlockKind.FENCED_CODE,
        )

    def _next_block(self, i: int) -> int:
        text = self.texts[i]
        if not text.strip():
            j = i
            while j + 1 < len(self.texts) and not self.texts[j + 1].strip():
                j += 1
            return self._emit(BlockKind.BLANK, i, j)

        indent = expand_indent(text)
        in_list = self._in_list_context()
        if in_list and self._previous_is_blank() and not _LIST_RE.match(text):
            if indent < self.list_stack[-1][1] and indent < self.list_stack[0][1]:
                self.list_stack = []
                in_list = False
        # An unindented block start closes the list even without a blank line.
        if in_list and indent < self.list_stack[0][1] and not _LIST_RE.match(text) and self._is_block_start(text):
            self.list_stack = []
            in_list = False

        if _FENCE_RE.match(text) and (indent < 4 or in_list):
            return self._fenced(i)
        if indent >= 4 and not in_list and self._previous_is_blank():
            return self._indented_code(i)
        if not in_list:
            self.list_stack = []
        if _HR_RE.match(text):
            return self._emit(BlockKind.THEMATIC_BREAK, i, i)
        if _ATX_RE.match(text):
            return self._atx(i)
        if _LIST_RE.match(text):
            return self._list_item(i)
        if in_list:
            return self._list_continuation(i)
        if _QUOTE_RE.match(text):
            return self._blockquote(i)
        if _HTML_RE.match(text):
            return self._html(i)
        if self._is_table_start(i):
            return self._table(i)
        return self._paragraph(i)

    def _is_block_start(self, text: str) -> bool:
        return bool(
            _FENCE_RE.match(text) and expand_indent(text) < 4
            or _HR_RE.match(text)
            or _ATX_RE.match(text)
            or _LIST_RE.match(text)
            or _QUOTE_RE.match(text)
        )

    def _fenced(self, i: int) -> int:
        m = _FENCE_RE.match(self.texts[i])
        assert m is not None
        marker = m.group(2)
        info = m.group(3).strip()
        for j in range(i + 1, len(self.texts)):
            close = self.texts[j].strip()
            if close.startswith(marker[0] * len(marker)) and not close.strip(marker[0]):
                return self._emit(BlockKind.FENCED_CODE, i, j, fence=marker, info=info,
                                  indent=expand_indent(self.texts[i]))
        return self._emit(BlockKind.FENCED_CODE, i, len(self.texts) - 1, fence=marker, info=info,
                          unterminated=True, indent=expand_indent(self.texts[i]))

    def _indented_code(self, i: int) -> int:
        j = i
        last_code = i
        while j + 1 < len(self.texts):
            nxt = self.texts[j + 1]
            if nxt.strip() and expand_indent(nxt) < 4:
                break
            j += 1
            if nxt.strip():
                last_code = j
        return self._emit(BlockKind.INDENTED_CODE, i, last_code, indent=expand_indent(self.texts[i]))

    def _atx(self, i: int) -> int:
        m = _ATX_RE.match(self.texts[i])
        assert m is not None
        level = len(m.group(2))
        rest = m.group(3)
        style = "atx"
        body = rest
        stripped = rest.rstrip()
        if stripped.endswith("#") and stripped.strip("#").strip():
            closing = len(stripped) - len(stripped.rstrip("#"))
            before = stripped[: len(stripped) - closing]
            space_before_close = len(before) - len(before.rstrip())
            space_after_open = len(rest) - len(rest.lstrip())
            if space_before_close > 0 or space_after_open == 0:
                style = "atx_closed"
                body = before
        return self._emit(BlockKind.HEADING, i, i, heading_level=level, heading_style=style,
                          heading_text=body.strip(), indent=expand_indent(self.texts[i]))

    def _list_item(self, i: int) -> int:
        m = _LIST_RE.match(self.texts[i])
        assert m is not None
        indent = expand_indent(m.group(1))
        marker = m.group(2)
        spacing = len(m.group(3).expandtabs(4)) if m.group(4) else 1
        content_indent = indent + len(marker) + spacing
        while self.list_stack and indent < self.list_stack[-1][1] and indent <= self.list_stack[-1][0]:
            if indent == self.list_stack[-1][0]:
                break
            self.list_stack.pop()
        if self.list_stack and indent == self.list_stack[-1][0]:
            self.list_stack[-1] = (indent, content_indent)
        elif not self.list_stack or indent > self.list_stack[-1][0]:
            self.list_stack.append((indent, content_indent))
        else:
            self.list_stack = [(indent, content_indent)]
        level = len(self.list_stack) - 1
        ordered = marker[-1] in ".)" and marker[:-1].isdigit()
        meta: dict[str, object] = {
            "list_marker": marker[-1] if ordered else marker,
            "ordered": ordered,
            "ordinal": int(marker[:-1]) if ordered else None,
            "indent": indent,
            "content_indent": content_indent,
            "marker_spacing": len(m.group(3).expandtabs(4)),
            "list_level": level,
        }
        end = self._lazy_end(i, content_indent)
        return self._emit(BlockKind.LIST_ITEM, i, end, **meta)

    def _list_continuation(self, i: int) -> int:
        indent, content_indent = self.list_stack[-1]
        for depth in range(len(self.list_stack) - 1, -1, -1):
            if expand_indent(self.texts[i]) >= self.list_stack[depth][1]:
                indent, content_indent = self.list_stack[depth]
                self.list_stack = self.list_stack[: depth + 1]
                break
        end = self._lazy_end(i, content_indent)
        return self._emit(BlockKind.LIST_ITEM, i, end, continuation=True, indent=indent,
                          content_indent=content_indent, list_level=len(self.list_stack) - 1)

    def _lazy_end(self, i: int, content_indent: int) -> int:
        j = i
        while j + 1 < len(self.texts):
            nxt = self.texts[j + 1]
            if not nxt.strip():
                break
            if _FENCE_RE.match(nxt) or _LIST_RE.match(nxt) or _HR_RE.match(nxt):
                break
            if _ATX_RE.match(nxt) or _QUOTE_RE.match(nxt):
                break
            j += 1
        return j

    def _blockquote(self, i: int) -> int:
        j = i
        while j + 1 < len(self.texts):
            nxt = self.texts[j + 1]
            if not nxt.strip():
                break
            if not _QUOTE_RE.match(nxt) and self._is_block_start(nxt):
                break
            j += 1
        return self._emit(BlockKind.BLOCKQUOTE, i, j)

    def _html(self, i: int) -> int:
        m = _HTML_RE.match(self.texts[i])
        assert m is not None
        if m.group(1) == "!--":
            for j in range(i, len(self.texts)):
                if "-->" in self.texts[j][(self.texts[j].find("<!--") + 4) if j == i else 0:]:
                    return self._emit(BlockKind.HTML, i, j)
            return self._emit(BlockKind.HTML, i, len(self.texts) - 1)
        j = i
        while j + 1 < len(self.texts) and self.texts[j + 1].strip():
            j += 1
        return self._emit(BlockKind.HTML, i, j)

    def _is_table_start(self, i: int) -> bool:
        if i + 1 >= len(self.texts) or "|" not in self.texts[i]:
            return False
        delim = self.texts[i + 1]
        return "-" in delim and bool(_TABLE_DELIM_RE.match(delim)) and ("|" in delim or "|" in self.texts[i])

    def _table(self, i: int) -> int:
        j = i + 1
        while j + 1 < len(self.texts) and self.texts[j + 1].strip() and "|" in self.texts[j + 1]:
            j += 1
        return self._emit(BlockKind.TABLE, i, j)

    def _paragraph(self, i: int) -> int:
        j = i
        while j + 1 < len(self.texts):
            nxt = self.texts[j + 1]
            if not nxt.strip():
                break
            setext = _SETEXT_RE.match(nxt)
            if setext:
                level = 1 if setext.group(1).startswith("=") else 2
                text = " ".join(t.strip() for t in self.texts[i: j + 1])
                return self._emit(BlockKind.HEADING, i, j + 1, heading_level=level,
                                  heading_style="setext", heading_text=text,
                                  indent=expand_indent(self.texts[i]))
            if self._is_block_start(nxt):
                break
            j += 1
        return self._emit(BlockKind.PARAGRAPH, i, j)
