"""Read style files: the line oriented ``all`` / ``rule`` / ``exclude_rule`` format."""

import re
from pathlib import Path

from markdown_style_linter.domain.directives import (
    ConfigDirective,
    EnableAll,
    EnableTag,
    ExcludeRule,
    ExcludeTag,
    SetRule,
)
from markdown_style_linter.domain.errors import ConfigurationError, StyleSyntaxError
from markdown_style_linter.domain.protocols import StyleLoaderProtocol

_HEAD_RE = re.compile(r"^(all|rule|exclude_rule|tag|exclude_tag)(?![\w-])\s*(.*)$")
_ROCKET_RE = re.compile(r"^:(\w+)\s*=>\s*(.+)$")
_KEYWORD_RE = re.compile(r"^(\w+):\s+(.+)$")
_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?\d+\.\d+$")
_SYMBOL_RE = re.compile(r"^:(\w+)$")


class StyleFileLoader(StyleLoaderProtocol):
    """
    Parse a style file into an ordered directive list.

    Supported lines::

        all
        rule 'MD013', :line_length => 100, :code_blocks => false
        rule 'MD009', br_spaces: 2
        exclude_rule 'MD012'
        tag :whitespace
        exclude_tag :headers

    ``#`` starts a comment outside quotes. Values may be integers, floats,
    ``true``/``false``, quoted strings or symbols (``:atx`` is ``"atx"``).
    """

    def load(self, path: str) -> list[ConfigDirective]:
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Cannot read style file {path}: {exc}") from exc
        return self.parse(text, source=path)

    def parse(self, text: str, source: str = "<style>") -> list[ConfigDirective]:
        directives: list[ConfigDirective] = []
        for line_no, raw in enumerate(text.splitlines(), start=1):
            body = _strip_comment(raw, source, line_no).strip()
            if not body:
                continue
            directives.extend(self._parse_line(body, source, line_no, raw))
        return directives

    def _parse_line(self, body: str, source: str, line_no: int, raw: str) -> list[ConfigDirective]:
        m = _HEAD_RE.match(body)
        if not m:
            raise StyleSyntaxError(source, line_no, raw)
        keyword, rest = m.group(1), m.group(2).strip()
        if rest.startswith("(") and rest.endswith(")"):
            rest = rest[1:-1].strip()
        args = _split_args(rest, source, line_no, raw)

        if keyword == "all":
            if args:
                raise StyleSyntaxError(source, line_no, raw, "'all' takes no arguments")
            return [EnableAll()]
        if not args:
            raise StyleSyntaxError(source, line_no, raw, f"'{keyword}' needs a name")

        if keyword == "rule":
            code = _name(args[0], source, line_no, raw)
            params: dict[str, object] = {}
            for arg in args[1:]:
                key, value = _pair(arg, source, line_no, raw)
                params[key] = value
            return [SetRule(code, params=params)]

        names = [_name(arg, source, line_no, raw) for arg in args]
        if keyword == "exclude_rule":
            return [ExcludeRule(code) for code in names]
        if keyword == "tag":
            return [EnableTag(tag) for tag in names]
        return [ExcludeTag(tag) for tag in names]


def _strip_comment(raw: str, source: str, line_no: int) -> str:
    quote = ""
    for i, ch in enumerate(raw):
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "#":
            return raw[:i]
    if quote:
        raise StyleSyntaxError(source, line_no, raw, "unterminated string")
    return raw


def _split_args(rest: str, source: str, line_no: int, raw: str) -> list[str]:
    """Split on commas that are not inside quotes."""
    if not rest:
        return []
    args: list[str] = []
    quote = ""
    current: list[str] = []
    for ch in rest:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = ""
            continue
        if ch in "'\"":
            quote = ch
        if ch == ",":
            args.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    args.append("".join(current).strip())
    if any(not arg for arg in args):
        raise StyleSyntaxError(source, line_no, raw, "empty argument")
    return args


def _name(arg: str, source: str, line_no: int, raw: str) -> str:
    value = _value(arg, source, line_no, raw)
    if not isinstance(value, str) or not value:
        raise StyleSyntaxError(source, line_no, raw, f"expected a quoted name or symbol, got {arg}")
    return value


def _pair(arg: str, source: str, line_no: int, raw: str) -> tuple[str, object]:
    m = _ROCKET_RE.match(arg) or _KEYWORD_RE.match(arg)
    if not m:
        raise StyleSyntaxError(source, line_no, raw, f"expected ':param => value', got {arg}")
    return m.group(1), _value(m.group(2).strip(), source, line_no, raw)


def _value(token: str, source: str, line_no: int, raw: str) -> object:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "'\"":
        return token[1:-1]
    if token == "true":
        return True
    if token == "false":
        return False
    if _INT_RE.match(token):
        return int(token)
    if _FLOAT_RE.match(token):
        return float(token)
    symbol = _SYMBOL_RE.match(token)
    if symbol:
        return symbol.group(1)
    raise StyleSyntaxError(source, line_no, raw, f"invalid value {token}")
