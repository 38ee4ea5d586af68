"""Unit tests for RuleRegistry catalog loading."""

from pathlib import Path

import pytest

from markdown_style_linter.domain.checks import CHECKS
from markdown_style_linter.domain.errors import CatalogError, UnknownRule
from markdown_style_linter.domain.rules import ParamType
from markdown_style_linter.infrastructure.services.rule_registry import RuleRegistry


def _no_violations(doc, params):
    return []


class TestPackagedCatalog:
    """The shipped rule_registry.yaml."""

    def test_every_check_has_an_entry(self, registry: RuleRegistry) -> None:
        assert set(registry.codes()) == set(CHECKS)
        assert len(registry.all_rules()) == len(CHECKS)
        assert registry.version == 1

    def test_codes_in_catalog_order(self, registry: RuleRegistry) -> None:
        codes = registry.codes()
        assert codes[0] == "MD001"
        assert codes == sorted(codes)

    def test_lookup_by_code_and_alias(self, registry: RuleRegistry) -> None:
        rule = registry.lookup("MD013")
        assert rule.alias == "line-length"
        assert registry.lookup("line-length") is rule
        assert registry.lookup("md013") is rule

    def test_lookup_unknown(self, registry: RuleRegistry) -> None:
        with pytest.raises(UnknownRule) as exc_info:
            registry.lookup("MD999")
        assert exc_info.value.code == "MD999"

    def test_parameter_schema(self, registry: RuleRegistry) -> None:
        params = registry.lookup("MD013").params
        assert params["line_length"].type is ParamType.INTEGER
        assert params["line_length"].default == 80
        assert params["code_blocks"].default is True
        style = registry.lookup("MD003").params["style"]
        assert "setext_with_atx" in style.choices

    def test_tags(self, registry: RuleRegistry) -> None:
        whitespace = {rule.code for rule in registry.rules_with_tag("whitespace")}
        assert {"MD009", "MD010", "MD012"} <= whitespace
        assert "headers" in registry.tags()

    def test_check_for(self, registry: RuleRegistry) -> None:
        assert registry.check_for("MD009") is CHECKS["MD009"]
        assert registry.check_for("no-trailing-spaces") is CHECKS["MD009"]


class TestCatalogErrors:
    """Catalog and check map must agree."""

    def _write(self, tmp_path: Path, body: str) -> str:
        path = tmp_path / "catalog.yaml"
        path.write_text(body, encoding="utf-8")
        return str(path)

    def test_entry_without_check(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "version: 1\nrules:\n  MD001:\n    alias: one\n")
        with pytest.raises(CatalogError, match="without a check"):
            RuleRegistry(path, checks={})

    def test_check_without_entry(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "version: 1\nrules: {}\n")
        with pytest.raises(CatalogError, match="without a catalog entry"):
            RuleRegistry(path, checks={"MD001": _no_violations})

    def test_bad_default(self, tmp_path: Path) -> None:
        body = (
            "version: 1\nrules:\n  MD001:\n    alias: one\n"
            "    params:\n      level: {type: integer, default: high}\n"
        )
        with pytest.raises(CatalogError, match="level"):
            RuleRegistry(self._write(tmp_path, body), checks={"MD001": _no_violations})

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError):
            RuleRegistry(str(tmp_path / "absent.yaml"))

    def test_minimal_catalog(self, tmp_path: Path) -> None:
        body = "version: 3\nrules:\n  MD001:\n    alias: one\n    enabled: false\n    tags: [demo]\n"
        registry = RuleRegistry(self._write(tmp_path, body), checks={"MD001": _no_violations})
        rule = registry.lookup("one")
        assert registry.version == 3
        assert rule.default_enabled is False
        assert rule.tags == ("demo",)
