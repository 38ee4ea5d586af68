"""RuleRegistry: loads the packaged rule catalog and joins it with the check capabilities."""

from pathlib import Path
from typing import Mapping, Optional, cast

import yaml

from markdown_style_linter.domain.checks import CHECKS
from markdown_style_linter.domain.errors import CatalogError, UnknownRule
from markdown_style_linter.domain.protocols import RuleRegistryProtocol
from markdown_style_linter.domain.registry_types import ParameterEntry, RuleCatalog, RuleRegistryEntry
from markdown_style_linter.domain.rules import ParamType, Rule, RuleCheck, RuleParameter


class RuleRegistry(RuleRegistryProtocol):
    """Loads rule_registry.yaml once; read-only afterwards."""

    def __init__(
        self,
        registry_path: Optional[str] = None,
        checks: Optional[Mapping[str, RuleCheck]] = None,
    ) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._checks: Mapping[str, RuleCheck] = CHECKS if checks is None else checks
        self._version = 0
        self._rules: dict[str, Rule] = {}
        self._aliases: dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            raise CatalogError(f"Rule catalog not found: {self._path}")
        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict) or not isinstance(data.get("rules"), dict):
            raise CatalogError(f"Rule catalog {self._path} has no 'rules' mapping")
        catalog = cast(RuleCatalog, data)
        self._version = int(catalog.get("version", 0))

        entries = catalog["rules"]
        missing_checks = sorted(set(entries) - set(self._checks))
        orphan_checks = sorted(set(self._checks) - set(entries))
        if missing_checks:
            raise CatalogError(f"Catalog rules without a check: {', '.join(missing_checks)}")
        if orphan_checks:
            raise CatalogError(f"Checks without a catalog entry: {', '.join(orphan_checks)}")

        for code, entry in entries.items():
            rule = self._build_rule(str(code), entry)
            self._rules[rule.code] = rule
            if rule.alias:
                if rule.alias in self._aliases:
                    raise CatalogError(f"Duplicate alias '{rule.alias}'")
                self._aliases[rule.alias] = rule.code

    def _build_rule(self, code: str, entry: RuleRegistryEntry) -> Rule:
        params = {
            name: self._build_param(code, name, raw)
            for name, raw in (entry.get("params") or {}).items()
        }
        return Rule(
            code=code,
            alias=str(entry.get("alias", "")),
            description=str(entry.get("description", code)),
            tags=tuple(str(t) for t in entry.get("tags", [])),
            default_enabled=bool(entry.get("enabled", True)),
            params=params,
        )

    @staticmethod
    def _build_param(code: str, name: str, raw: ParameterEntry) -> RuleParameter:
        try:
            ptype = ParamType(raw.get("type", "string"))
        except ValueError as exc:
            raise CatalogError(f"{code}.{name}: unknown parameter type {raw.get('type')!r}") from exc
        param = RuleParameter(
            name=name,
            type=ptype,
            default=raw.get("default"),
            choices=tuple(raw.get("choices", [])),
        )
        if not param.accepts(param.default):
            raise CatalogError(f"{code}.{name}: default {param.default!r} is not a valid {param.describe()}")
        return param

    @property
    def version(self) -> int:
        return self._version

    def all_rules(self) -> frozenset[Rule]:
        return frozenset(self._rules.values())

    def codes(self) -> list[str]:
        """Rule codes in catalog order."""
        return list(self._rules)

    def lookup(self, code: str) -> Rule:
        """Return the rule for a code or alias. Raises UnknownRule."""
        key = self._aliases.get(code, code)
        rule = self._rules.get(key) or self._rules.get(key.upper())
        if rule is None:
            raise UnknownRule(code)
        return rule

    def rules_with_tag(self, tag: str) -> list[Rule]:
        return [rule for rule in self._rules.values() if tag in rule.tags]

    def tags(self) -> frozenset[str]:
        return frozenset(tag for rule in self._rules.values() for tag in rule.tags)

    def check_for(self, code: str) -> RuleCheck:
        return self._checks[self.lookup(code).code]
