"""List rules. Items are grouped into lists by walking the block partition."""

from typing import Mapping, Optional

from markdown_style_linter.domain.checks.params import int_param, str_param
from markdown_style_linter.domain.document import Block, BlockKind, Document
from markdown_style_linter.domain.rules import Violation

_MARKER_NAMES: dict[str, str] = {"*": "asterisk", "+": "plus", "-": "dash"}


def list_groups(doc: Document) -> list[list[Block]]:
    """
    Split the document into lists.

    Each group holds the blocks of one list in order: item blocks,
    continuation blocks, blank blocks between them and indented fences.
    Trailing blank blocks are not part of a group.
    """
    groups: list[list[Block]] = []
    current: list[Block] = []
    for block in doc.blocks:
        if block.kind is BlockKind.LIST_ITEM:
            current.append(block)
            continue
        in_list_code = block.kind is BlockKind.FENCED_CODE and block.indent > 0
        if current and (block.kind is BlockKind.BLANK or in_list_code):
            current.append(block)
            continue
        if current:
            groups.append(current)
            current = []
    if current:
        groups.append(current)
    for group in groups:
        while group and group[-1].kind is BlockKind.BLANK:
            group.pop()
    return groups


def _items(group: list[Block]) -> list[Block]:
    return [b for b in group if b.kind is BlockKind.LIST_ITEM and not b.continuation]


def _parents(group: list[Block]) -> dict[int, Optional[Block]]:
    """Map each item's index to its parent item (None at the top level)."""
    parents: dict[int, Optional[Block]] = {}
    stack: list[Block] = []
    for item in _items(group):
        while stack and stack[-1].list_level >= item.list_level:
            stack.pop()
        parents[item.index] = stack[-1] if stack else None
        stack.append(item)
    return parents


def ul_style(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD004"""
    style = str_param(params, "style")
    fixed = {"asterisk": "*", "plus": "+", "dash": "-"}
    found: list[Violation] = []
    first_marker: Optional[str] = None
    for group in list_groups(doc):
        by_level: dict[int, str] = {}
        for item in _items(group):
            if item.ordered:
                continue
            marker = item.list_marker
            if first_marker is None:
                first_marker = marker
            if style == "consistent":
                expected = first_marker
            elif style == "sublist":
                expected = by_level.setdefault(item.list_level, marker)
                parent_marker = by_level.get(item.list_level - 1)
                if item.list_level > 0 and marker == parent_marker:
                    expected = next(m for m in "*+-" if m != parent_marker)
            else:
                expected = fixed[style]
            if marker != expected:
                found.append(
                    Violation(
                        "MD004",
                        item.start,
                        f"Unordered list style [Expected: {_MARKER_NAMES[expected]}; "
                        f"Actual: {_MARKER_NAMES[marker]}]",
                    )
                )
    return found


def list_indent(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD005"""
    found: list[Violation] = []
    for group in list_groups(doc):
        expected_by_level: dict[int, int] = {}
        for item in _items(group):
            expected = expected_by_level.setdefault(item.list_level, item.indent)
            if item.indent != expected:
                found.append(
                    Violation(
                        "MD005",
                        item.start,
                        "Inconsistent indentation for list items at the same level "
                        f"[Expected: {expected}; Actual: {item.indent}]",
                    )
                )
    return found


def ul_start_left(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD006"""
    found: list[Violation] = []
    for group in list_groups(doc):
        for item in _items(group):
            if not item.ordered and item.list_level == 0 and item.indent > 0:
                found.append(
                    Violation("MD006", item.start, "Consider starting bulleted lists at the beginning of the line")
                )
    return found


def ul_indent(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD007: nested bullets indent ``indent`` columns per level, when every ancestor is a bullet."""
    width = int_param(params, "indent")
    found: list[Violation] = []
    for group in list_groups(doc):
        parents = _parents(group)
        for item in _items(group):
            if item.ordered or item.list_level == 0:
                continue
            ancestor = parents.get(item.index)
            all_bullets = True
            while ancestor is not None:
                if ancestor.ordered:
                    all_bullets = False
                    break
                ancestor = parents.get(ancestor.index)
            if not all_bullets:
                continue
            top = _top_indent(item, parents)
            expected = top + item.list_level * width
            if item.indent != expected:
                found.append(
                    Violation(
                        "MD007",
                        item.start,
                        f"Unordered list indentation [Expected: {expected}; Actual: {item.indent}]",
                    )
                )
    return found


def _top_indent(item: Block, parents: dict[int, Optional[Block]]) -> int:
    node = item
    parent = parents.get(node.index)
    while parent is not None:
        node = parent
        parent = parents.get(node.index)
    return node.indent


def ol_prefix(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD029: ordered list prefixes are all 1, all 0, or increase by one."""
    style = str_param(params, "style")
    found: list[Violation] = []
    for group in list_groups(doc):
        runs: dict[tuple[Optional[int], int], list[Block]] = {}
        parents = _parents(group)
        for item in _items(group):
            if not item.ordered:
                continue
            parent = parents.get(item.index)
            runs.setdefault((parent.index if parent else None, item.list_level), []).append(item)
        for run in runs.values():
            found.extend(_check_run(run, style))
    return found


def _check_run(run: list[Block], style: str) -> list[Violation]:
    if style == "one_or_ordered":
        is_ones = len(run) > 1 and run[0].ordinal == 1 and run[1].ordinal == 1
        style = "one" if is_ones else "ordered"
    found: list[Violation] = []
    first = run[0].ordinal or 0
    for position, item in enumerate(run):
        if style == "one":
            expected = 1
        elif style == "zero":
            expected = 0
        else:
            expected = (first if first in (0, 1) else 1) + position
        if item.ordinal != expected:
            found.append(
                Violation(
                    "MD029",
                    item.start,
                    f"Ordered list item prefix [Expected: {expected}; Actual: {item.ordinal}]",
                )
            )
    return found


def list_marker_space(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """
    MD030: spaces between the list marker and the item text.

    A list counts as multi-paragraph when any of its items has a
    continuation block.
    """
    found: list[Violation] = []
    for group in list_groups(doc):
        multi = any(b.kind is BlockKind.LIST_ITEM and b.continuation for b in group)
        for item in _items(group):
            if not doc.line(item.start).text[item.indent:].split(maxsplit=1)[1:]:
                continue
            key = ("ol" if item.ordered else "ul") + ("_multi" if multi else "_single")
            expected = int_param(params, key)
            if item.marker_spacing != expected:
                found.append(
                    Violation(
                        "MD030",
                        item.start,
                        f"Spaces after list markers [Expected: {expected}; Actual: {item.marker_spacing}]",
                    )
                )
    return found


def blanks_around_lists(doc: Document, params: Mapping[str, object]) -> list[Violation]:
    """MD032"""
    found: list[Violation] = []
    for group in list_groups(doc):
        before = doc.previous_block(group[0])
        after = doc.next_block(group[-1])
        if before is not None and before.kind not in (BlockKind.BLANK, BlockKind.FRONT_MATTER):
            found.append(Violation("MD032", group[0].start, "Lists should be surrounded by blank lines"))
        if after is not None and after.kind is not BlockKind.BLANK:
            found.append(Violation("MD032", group[-1].end, "Lists should be surrounded by blank lines"))
    return found
