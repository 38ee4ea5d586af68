"""Unit tests for ConfigurationResolver directive replay."""

import pytest

from markdown_style_linter.domain.directives import (
    DisableAll,
    EnableAll,
    EnableTag,
    ExcludeRule,
    ExcludeTag,
    SetRule,
)
from markdown_style_linter.domain.errors import InvalidParameter, UnknownRule, UnknownTag
from markdown_style_linter.use_cases.resolve_config import ConfigurationResolver


class TestInitialState:
    def test_no_directives_gives_catalog_defaults(self, resolver: ConfigurationResolver, registry) -> None:
        config = resolver.resolve([])
        assert set(config) == set(registry.codes())
        assert config["MD013"].params["line_length"] == 80
        assert config.is_enabled("MD013")


class TestDirectives:
    """Replay semantics."""

    def test_enable_all_then_exclude(self, resolver: ConfigurationResolver, registry) -> None:
        config = resolver.resolve([EnableAll(), ExcludeRule("MD012")])
        assert config.disabled_codes() == ["MD012"]
        assert len(config.enabled_codes()) == len(registry.codes()) - 1

    def test_sample_style(self, resolver: ConfigurationResolver, sample_directives) -> None:
        config = resolver.resolve(sample_directives)
        assert config["MD013"].params["line_length"] == 100
        assert config["MD013"].params["code_blocks"] is False
        assert config["MD013"].params["tables"] is True
        assert config["MD009"].params["br_spaces"] == 2
        assert not config.is_enabled("MD012")

    def test_set_rule_implicitly_enables(self, resolver: ConfigurationResolver) -> None:
        config = resolver.resolve([DisableAll(), SetRule("MD013", params={"line_length": 100})])
        assert config.enabled_codes() == ["MD013"]

    def test_explicit_disable_keeps_params(self, resolver: ConfigurationResolver) -> None:
        config = resolver.resolve(
            [SetRule("MD013", params={"line_length": 100}), SetRule("MD013", enabled=False)]
        )
        assert not config.is_enabled("MD013")
        assert config["MD013"].params["line_length"] == 100

    def test_last_writer_wins_per_key(self, resolver: ConfigurationResolver) -> None:
        config = resolver.resolve(
            [
                SetRule("MD013", params={"line_length": 90, "headers": False}),
                SetRule("MD013", params={"line_length": 120}),
            ]
        )
        assert config["MD013"].params["line_length"] == 120
        assert config["MD013"].params["headers"] is False

    def test_distinct_keys_are_order_independent(self, resolver: ConfigurationResolver) -> None:
        a = SetRule("MD013", params={"line_length": 100})
        b = SetRule("MD013", params={"code_blocks": False})
        assert resolver.resolve([a, b]) == resolver.resolve([b, a])

    def test_enable_all_resets_params(self, resolver: ConfigurationResolver) -> None:
        config = resolver.resolve([SetRule("MD013", params={"line_length": 100}), EnableAll()])
        assert config["MD013"].params["line_length"] == 80

    def test_exclude_keeps_params(self, resolver: ConfigurationResolver) -> None:
        config = resolver.resolve([SetRule("MD009", params={"br_spaces": 2}), ExcludeRule("MD009")])
        assert config["MD009"].params["br_spaces"] == 2

    def test_alias_addresses_rule(self, resolver: ConfigurationResolver) -> None:
        config = resolver.resolve([SetRule("line-length", params={"line_length": 72})])
        assert config["MD013"].params["line_length"] == 72

    def test_tags(self, resolver: ConfigurationResolver, registry) -> None:
        config = resolver.resolve([ExcludeTag("headers")])
        assert not config.is_enabled("MD001")
        assert config.is_enabled("MD013")
        config = resolver.resolve([DisableAll(), EnableTag("whitespace")])
        expected = {rule.code for rule in registry.rules_with_tag("whitespace")}
        assert set(config.enabled_codes()) == expected

    def test_idempotent(self, resolver: ConfigurationResolver, sample_directives) -> None:
        assert resolver.resolve(sample_directives) == resolver.resolve(sample_directives)


class TestErrors:
    """Resolution fails fast."""

    def test_unknown_rule_names_code_and_index(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(UnknownRule) as exc_info:
            resolver.resolve([EnableAll(), SetRule("MD999", enabled=True)])
        assert exc_info.value.code == "MD999"
        assert exc_info.value.directive_index == 1
        assert "MD999" in str(exc_info.value)

    def test_unknown_rule_in_exclude(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(UnknownRule):
            resolver.resolve([ExcludeRule("MD999")])

    def test_unknown_tag(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(UnknownTag) as exc_info:
            resolver.resolve([EnableTag("nonsense")])
        assert exc_info.value.tag == "nonsense"

    def test_wrong_type(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(InvalidParameter) as exc_info:
            resolver.resolve([SetRule("MD013", params={"line_length": "long"})])
        err = exc_info.value
        assert (err.code, err.parameter, err.expected, err.given) == ("MD013", "line_length", "integer", "long")

    def test_bool_is_not_an_integer(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(InvalidParameter):
            resolver.resolve([SetRule("MD012", params={"maximum": True})])

    def test_disallowed_choice(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(InvalidParameter, match="one of"):
            resolver.resolve([SetRule("MD003", params={"style": "fancy"})])

    def test_unknown_parameter(self, resolver: ConfigurationResolver) -> None:
        with pytest.raises(InvalidParameter) as exc_info:
            resolver.resolve([SetRule("MD013", params={"width": 100})])
        assert exc_info.value.parameter == "width"
