"""Unit tests for RuleSelector."""

import pytest

from markdown_style_linter.domain.directives import EnableAll, ExcludeRule, ExcludeTag, SetRule
from markdown_style_linter.domain.errors import UnknownRule, UnknownTag
from markdown_style_linter.use_cases.select_rules import RuleSelector


@pytest.fixture
def selector(registry) -> RuleSelector:
    return RuleSelector(registry)


class TestDirectives:
    def test_no_selection_adds_nothing(self, selector: RuleSelector) -> None:
        assert selector.directives() == []
        assert selector.directives(rules="", tags=" , ") == []

    def test_negative_entries(self, selector: RuleSelector) -> None:
        assert selector.directives(rules="~MD013, ~MD012", tags="~headers") == [
            ExcludeRule("MD013"),
            ExcludeRule("MD012"),
            ExcludeTag("headers"),
        ]

    def test_positive_rules_restrict_the_run(self, selector: RuleSelector, resolver) -> None:
        directives = [EnableAll(), *selector.directives(rules="MD009,line-length")]
        assert resolver.resolve(directives).enabled_codes() == ["MD009", "MD013"]

    def test_positive_tag(self, selector: RuleSelector, resolver, registry) -> None:
        config = resolver.resolve([EnableAll(), *selector.directives(tags="whitespace")])
        assert set(config.enabled_codes()) == {rule.code for rule in registry.rules_with_tag("whitespace")}

    def test_selection_never_enables_a_disabled_rule(self, selector: RuleSelector, resolver) -> None:
        style = [EnableAll(), ExcludeRule("MD013")]
        config = resolver.resolve([*style, *selector.directives(rules="MD013,MD009")])
        assert config.enabled_codes() == ["MD009"]

    def test_style_params_survive(self, selector: RuleSelector, resolver) -> None:
        style = [SetRule("MD013", params={"line_length": 100})]
        config = resolver.resolve([*style, *selector.directives(rules="MD013")])
        assert config["MD013"].params["line_length"] == 100
        assert config.is_enabled("MD013")


class TestUnknownNames:
    def test_unknown_positive_rule(self, selector: RuleSelector) -> None:
        with pytest.raises(UnknownRule):
            selector.directives(rules="MD999")

    def test_unknown_positive_tag(self, selector: RuleSelector) -> None:
        with pytest.raises(UnknownTag):
            selector.directives(tags="nonsense")

    def test_unknown_negative_rule_fails_at_resolution(self, selector: RuleSelector, resolver) -> None:
        with pytest.raises(UnknownRule):
            resolver.resolve(selector.directives(rules="~MD999"))
