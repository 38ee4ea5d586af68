"""Use Case: Lint Document - evaluate every enabled rule against one Document."""

import logging
from typing import Optional

from markdown_style_linter.domain.document import Document
from markdown_style_linter.domain.protocols import RuleRegistryProtocol, TelemetryPort
from markdown_style_linter.domain.rules import EffectiveConfig, Violation, ViolationKind

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Run enabled rules and return violations ordered by (line, code).

    A check that raises is isolated into a single ``rule_fault`` violation;
    every other rule still runs.
    """

    def __init__(self, registry: RuleRegistryProtocol, telemetry: Optional[TelemetryPort] = None) -> None:
        self.registry = registry
        self.telemetry = telemetry

    def lint(self, doc: Document, config: EffectiveConfig) -> list[Violation]:
        found: list[Violation] = []
        for code in self.registry.codes():
            rule_config = config[code]
            if not rule_config.enabled:
                continue
            check = self.registry.check_for(code)
            try:
                found.extend(check(doc, rule_config.params))
            except Exception as exc:  # noqa: BLE001
                found.append(self._fault(code, exc))
        return sorted(found, key=Violation.sort_key)

    def _fault(self, code: str, exc: Exception) -> Violation:
        logger.error("Rule %s failed: %s", code, exc, exc_info=exc)
        if self.telemetry is not None:
            self.telemetry.warning(f"Rule {code} failed: {exc}")
        return Violation(
            code,
            1,
            f"Rule fault in {code}: {type(exc).__name__}: {exc}",
            kind=ViolationKind.RULE_FAULT,
        )
