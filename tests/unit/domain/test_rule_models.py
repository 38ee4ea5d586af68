"""Unit tests for rule value objects."""

import pytest

from markdown_style_linter.domain.rules import (
    EffectiveConfig,
    ParamType,
    RuleConfig,
    RuleParameter,
    Violation,
    ViolationKind,
)


class TestViolation:
    def test_sort_key_orders_by_line_then_code(self) -> None:
        found = [
            Violation("MD013", 2, "b"),
            Violation("MD009", 2, "a"),
            Violation("MD047", 1, "c"),
        ]
        ordered = sorted(found, key=Violation.sort_key)
        assert [(v.line, v.code) for v in ordered] == [(1, "MD047"), (2, "MD009"), (2, "MD013")]

    def test_fault_kind(self) -> None:
        assert Violation("MD001", 1, "boom", kind=ViolationKind.RULE_FAULT).is_fault
        assert not Violation("MD001", 1, "style").is_fault


class TestRuleParameter:
    """Type acceptance for parameter values."""

    def test_integer_rejects_bool(self) -> None:
        param = RuleParameter("maximum", ParamType.INTEGER, 1)
        assert param.accepts(3)
        assert not param.accepts(True)
        assert not param.accepts("3")

    def test_choice(self) -> None:
        param = RuleParameter("style", ParamType.CHOICE, "atx", ("atx", "setext"))
        assert param.accepts("setext")
        assert not param.accepts("fancy")
        assert param.describe() == "one of atx, setext"

    def test_boolean_and_string(self) -> None:
        assert RuleParameter("x", ParamType.BOOLEAN, False).accepts(True)
        assert not RuleParameter("x", ParamType.BOOLEAN, False).accepts(1)
        assert RuleParameter("x", ParamType.STRING, "").accepts(".,;")


class TestRuleConfig:
    def test_params_are_read_only_copy(self) -> None:
        source = {"line_length": 80}
        config = RuleConfig(enabled=True, params=source)
        source["line_length"] = 120
        assert config.params["line_length"] == 80
        with pytest.raises(TypeError):
            config.params["line_length"] = 100  # type: ignore[index]

    def test_structural_equality_and_hash(self) -> None:
        a = RuleConfig(True, {"x": 1, "y": 2})
        b = RuleConfig(True, {"y": 2, "x": 1})
        assert a == b
        assert hash(a) == hash(b)


class TestEffectiveConfig:
    def test_mapping_access(self) -> None:
        config = EffectiveConfig({"MD001": RuleConfig(True), "MD002": RuleConfig(False)})
        assert len(config) == 2
        assert "MD001" in config
        assert config.enabled_codes() == ["MD001"]
        assert config.disabled_codes() == ["MD002"]
        assert config.is_enabled("MD001")
        assert not config.is_enabled("MD999")

    def test_equality(self) -> None:
        left = EffectiveConfig({"MD001": RuleConfig(True, {"a": 1})})
        right = EffectiveConfig({"MD001": RuleConfig(True, {"a": 1})})
        assert left == right
