"""Use Case: Select Rules - turn ``--rules``/``--tags`` selections into directives."""

from typing import Optional

from markdown_style_linter.domain.directives import ConfigDirective, ExcludeRule, ExcludeTag
from markdown_style_linter.domain.errors import UnknownTag
from markdown_style_linter.domain.protocols import RuleRegistryProtocol


def _split(selection: Optional[str]) -> tuple[list[str], list[str]]:
    """Split ``"a,~b, c"`` into (included, excluded)."""
    included: list[str] = []
    excluded: list[str] = []
    for item in (selection or "").split(","):
        item = item.strip()
        if not item:
            continue
        if item.startswith("~"):
            excluded.append(item[1:].strip())
        else:
            included.append(item)
    return included, excluded


class RuleSelector:
    """
    Build the directives appended after a style's own directives.

    Positive entries restrict the run: every rule that is neither listed in
    ``rules`` nor tagged with one of ``tags`` is excluded. Entries prefixed
    with ``~`` exclude a rule or tag. Selections never enable a rule the
    style disabled, and parameters set by the style are kept.
    """

    def __init__(self, registry: RuleRegistryProtocol) -> None:
        self.registry = registry

    def directives(self, rules: Optional[str] = None, tags: Optional[str] = None) -> list[ConfigDirective]:
        rule_in, rule_out = _split(rules)
        tag_in, tag_out = _split(tags)
        result: list[ConfigDirective] = []

        if rule_in or tag_in:
            keep = {self.registry.lookup(code).code for code in rule_in}
            for tag in tag_in:
                tagged = self.registry.rules_with_tag(tag)
                if not tagged:
                    raise UnknownTag(tag)
                keep.update(rule.code for rule in tagged)
            result.extend(ExcludeRule(code) for code in self.registry.codes() if code not in keep)

        result.extend(ExcludeRule(code) for code in rule_out)
        result.extend(ExcludeTag(tag) for tag in tag_out)
        return result
