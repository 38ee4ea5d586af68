"""Rule check capabilities keyed by rule code.

Every check is a pure function ``check(doc, params) -> list[Violation]``.
The registry joins this mapping with the packaged catalog metadata.
"""

from typing import Mapping

from markdown_style_linter.domain.checks import blocks, headings, inline, lines, lists
from markdown_style_linter.domain.rules import RuleCheck

CHECKS: Mapping[str, RuleCheck] = {
    "MD001": headings.header_increment,
    "MD002": headings.first_header_h1,
    "MD003": headings.header_style,
    "MD004": lists.ul_style,
    "MD005": lists.list_indent,
    "MD006": lists.ul_start_left,
    "MD007": lists.ul_indent,
    "MD009": lines.trailing_spaces,
    "MD010": lines.hard_tabs,
    "MD011": inline.no_reversed_links,
    "MD012": lines.multiple_blanks,
    "MD013": lines.line_length,
    "MD014": blocks.commands_show_output,
    "MD018": headings.no_missing_space_atx,
    "MD019": headings.no_multiple_space_atx,
    "MD020": headings.no_missing_space_closed_atx,
    "MD021": headings.no_multiple_space_closed_atx,
    "MD022": headings.blanks_around_headers,
    "MD023": headings.header_start_left,
    "MD024": headings.no_duplicate_header,
    "MD025": headings.single_h1,
    "MD026": headings.no_trailing_punctuation,
    "MD027": blocks.no_multiple_space_blockquote,
    "MD028": blocks.no_blanks_blockquote,
    "MD029": lists.ol_prefix,
    "MD030": lists.list_marker_space,
    "MD031": blocks.blanks_around_fences,
    "MD032": lists.blanks_around_lists,
    "MD033": inline.no_inline_html,
    "MD034": inline.no_bare_urls,
    "MD035": blocks.hr_style,
    "MD036": headings.no_emphasis_as_header,
    "MD037": inline.no_space_in_emphasis,
    "MD038": inline.no_space_in_code,
    "MD039": inline.no_space_in_links,
    "MD040": blocks.fenced_code_language,
    "MD041": headings.first_line_h1,
    "MD046": blocks.code_block_style,
    "MD047": lines.single_trailing_newline,
}
