"""Text and JSON reporters for corpus results."""

import json
from typing import TYPE_CHECKING

import typer

from markdown_style_linter.domain.entities import DocumentStatus

if TYPE_CHECKING:
    from markdown_style_linter.domain.entities import CorpusResult
    from markdown_style_linter.domain.protocols import RuleRegistryProtocol
    from markdown_style_linter.domain.rules import Violation


class TextViolationReporter:
    """One ``path:line: CODE message`` line per violation, then a summary."""

    def __init__(self, registry: "RuleRegistryProtocol") -> None:
        self.registry = registry

    def _label(self, violation: "Violation", show_aliases: bool) -> str:
        if show_aliases and not violation.is_fault:
            alias = self.registry.lookup(violation.code).alias
            return alias or violation.code
        return violation.code

    def report(self, result: "CorpusResult", show_aliases: bool = False) -> None:
        for doc in result.documents:
            if doc.status is DocumentStatus.ERROR:
                typer.secho(f"{doc.path}: error: {doc.error}", fg=typer.colors.RED, err=True)
                continue
            if doc.status is DocumentStatus.SKIPPED:
                typer.secho(f"{doc.path}: skipped", fg=typer.colors.YELLOW, err=True)
                continue
            for v in doc.violations:
                typer.echo(f"{doc.path}:{v.line}: {self._label(v, show_aliases)} {v.message}")

        files = sum(1 for d in result.documents if d.violations)
        summary = f"{result.violation_count} violation(s) in {files} file(s)"
        if result.errors:
            summary += f", {len(result.errors)} file error(s)"
        if result.skipped:
            summary += f", {len(result.skipped)} skipped"
        if result.violation_count or result.errors:
            typer.secho(summary, fg=typer.colors.RED, bold=True)
        else:
            typer.secho(summary, fg=typer.colors.GREEN)


class JsonViolationReporter:
    """A JSON list of violation objects on stdout."""

    def __init__(self, registry: "RuleRegistryProtocol") -> None:
        self.registry = registry

    def _entry(self, path: str, violation: "Violation") -> dict[str, object]:
        rule = self.registry.lookup(violation.code)
        description = violation.message if violation.is_fault else rule.description
        return {
            "filename": path,
            "line": violation.line,
            "rule": violation.code,
            "aliases": [rule.alias] if rule.alias else [],
            "description": description,
            "kind": violation.kind.value,
        }

    def report(self, result: "CorpusResult", show_aliases: bool = False) -> None:
        entries = [
            self._entry(doc.path, v)
            for doc in result.documents
            for v in doc.violations
        ]
        typer.echo(json.dumps(entries, indent=2))
        for doc in result.errors:
            typer.secho(f"{doc.path}: error: {doc.error}", fg=typer.colors.RED, err=True)
