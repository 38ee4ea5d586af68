"""Use Case: Resolve Config - replay configuration directives into an EffectiveConfig."""

from typing import Iterable, Mapping

from markdown_style_linter.domain.directives import (
    ConfigDirective,
    DisableAll,
    EnableAll,
    EnableTag,
    ExcludeRule,
    ExcludeTag,
    SetRule,
)
from markdown_style_linter.domain.errors import InvalidParameter, UnknownRule, UnknownTag
from markdown_style_linter.domain.protocols import RuleRegistryProtocol
from markdown_style_linter.domain.rules import EffectiveConfig, Rule, RuleConfig


class ConfigurationResolver:
    """
    Plain reducer over an ordered directive list.

    State starts at every rule's default. Directives apply strictly in order
    and the last writer wins per rule and per parameter key. Any error aborts
    resolution; no partial EffectiveConfig is ever returned.
    """

    def __init__(self, registry: RuleRegistryProtocol) -> None:
        self.registry = registry

    def initial_state(self) -> dict[str, RuleConfig]:
        return {
            code: RuleConfig(enabled=rule.default_enabled, params=rule.defaults())
            for code, rule in self._rules_in_order()
        }

    def resolve(self, directives: Iterable[ConfigDirective]) -> EffectiveConfig:
        state = self.initial_state()
        for index, directive in enumerate(directives):
            self._apply(state, index, directive)
        return EffectiveConfig(state)

    def _rules_in_order(self) -> list[tuple[str, Rule]]:
        return [(code, self.registry.lookup(code)) for code in self.registry.codes()]

    def _apply(self, state: dict[str, RuleConfig], index: int, directive: ConfigDirective) -> None:
        if isinstance(directive, (EnableAll, DisableAll)):
            enabled = isinstance(directive, EnableAll)
            for code, rule in self._rules_in_order():
                state[code] = RuleConfig(enabled=enabled, params=rule.defaults())
        elif isinstance(directive, SetRule):
            rule = self._lookup(directive.code, index)
            self._validate(rule, directive.params, index)
            current = state[rule.code]
            enabled = True if directive.enabled is None else directive.enabled
            state[rule.code] = RuleConfig(enabled=enabled, params={**current.params, **directive.params})
        elif isinstance(directive, ExcludeRule):
            rule = self._lookup(directive.code, index)
            state[rule.code] = RuleConfig(enabled=False, params=state[rule.code].params)
        elif isinstance(directive, (EnableTag, ExcludeTag)):
            tagged = self.registry.rules_with_tag(directive.tag)
            if not tagged:
                raise UnknownTag(directive.tag, index)
            enabled = isinstance(directive, EnableTag)
            for rule in tagged:
                state[rule.code] = RuleConfig(enabled=enabled, params=state[rule.code].params)
        else:
            raise TypeError(f"Unsupported directive at #{index}: {directive!r}")

    def _lookup(self, code: str, index: int) -> Rule:
        try:
            return self.registry.lookup(code)
        except UnknownRule as exc:
            raise UnknownRule(code, index) from exc

    @staticmethod
    def _validate(rule: Rule, params: Mapping[str, object], index: int) -> None:
        for name, value in params.items():
            schema = rule.params.get(name)
            if schema is None:
                known = ", ".join(rule.params) or "none"
                raise InvalidParameter(rule.code, name, f"a known parameter ({known})", value, index)
            if not schema.accepts(value):
                raise InvalidParameter(rule.code, name, schema.describe(), value, index)
