"""CLI entry points for mdstyle - Thin Controller using Typer."""

import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from markdown_style_linter.domain.config import ConfigurationLoader
from markdown_style_linter.domain.directives import ConfigDirective
from markdown_style_linter.domain.errors import ConfigurationError
from markdown_style_linter.domain.protocols import (
    FileSystemProtocol,
    RuleRegistryProtocol,
    StyleLoaderProtocol,
    TelemetryPort,
)
from markdown_style_linter.domain.rules import EffectiveConfig
from markdown_style_linter.interface.reporters import ViolationReporter
from markdown_style_linter.interface.telemetry import configure_logging
from markdown_style_linter.use_cases.lint_corpus import LintCorpusUseCase
from markdown_style_linter.use_cases.lint_document import RuleEngine
from markdown_style_linter.use_cases.resolve_config import ConfigurationResolver
from markdown_style_linter.use_cases.select_rules import RuleSelector

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    registry: RuleRegistryProtocol
    filesystem: FileSystemProtocol
    style_loader: StyleLoaderProtocol
    resolver: ConfigurationResolver
    selector: RuleSelector
    engine: RuleEngine
    text_reporter: ViolationReporter
    json_reporter: ViolationReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def load_directives(
        deps: CLIDependencies,
        style: Optional[Path],
        rules: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> List[ConfigDirective]:
        """Style directives (CLI flag, then pyproject) followed by the rule selection."""
        style_path = str(style) if style else deps.config_loader.style
        directives: List[ConfigDirective] = []
        if style_path:
            if not deps.filesystem.exists(style_path):
                raise ConfigurationError(f"Style file not found: {style_path}")
            directives.extend(deps.style_loader.load(style_path))
        directives.extend(deps.selector.directives(rules=rules, tags=tags))
        return directives

    @staticmethod
    def resolve_or_exit(
        deps: CLIDependencies,
        style: Optional[Path],
        rules: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> EffectiveConfig:
        """Resolve the effective config; a configuration error ends the run with exit code 2."""
        try:
            return deps.resolver.resolve(CLIAppFactory.load_directives(deps, style, rules, tags))
        except ConfigurationError as exc:
            deps.telemetry.error(str(exc))
            sys.exit(EXIT_CONFIG_ERROR)

    @staticmethod
    def discover(deps: CLIDependencies, paths: Optional[List[Path]]) -> List[str]:
        """Expand the given paths (default: current directory) into markdown files."""
        targets = [str(p) for p in paths] if paths else ["."]
        files: List[str] = []
        for target in targets:
            files.extend(
                deps.filesystem.glob_markdown_files(
                    target,
                    deps.config_loader.extensions,
                    deps.config_loader.exclude,
                )
            )
        return files

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="mdstyle",
            help="mdstyle: rule-based markdown style checker. Run 'mdstyle check' to lint; 'mdstyle rules' to list rules.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to lint (default: .)"),  # noqa: B008
            style: Optional[Path] = typer.Option(None, "--style", "-s", help="Style file to load"),  # noqa: B008
            rules: Optional[str] = typer.Option(
                None, "--rules", "-r", help="Only these rules; prefix with ~ to exclude (MD013,~MD012)"),
            tags: Optional[str] = typer.Option(
                None, "--tags", "-t", help="Only rules with these tags; prefix with ~ to exclude"),
            json_output: bool = typer.Option(False, "--json", "-j", help="Print violations as JSON"),
            show_aliases: bool = typer.Option(
                False, "--show-aliases", "-a", help="Show rule aliases instead of codes"),
            jobs: Optional[int] = typer.Option(None, "--jobs", min=1, help="Documents linted in parallel"),
            ignore_front_matter: bool = typer.Option(
                False, "--ignore-front-matter", "-i", help="Skip a leading front matter block"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
        ) -> None:
            """Lint markdown files and report style violations."""
            configure_logging(verbose)
            deps.telemetry.handshake()
            config = CLIAppFactory.resolve_or_exit(deps, style, rules, tags)
            deps.telemetry.step(f"{len(config.enabled_codes())} rule(s) enabled")

            files = CLIAppFactory.discover(deps, paths)
            use_case = LintCorpusUseCase(
                engine=deps.engine,
                source=deps.filesystem,
                telemetry=deps.telemetry,
                front_matter=ignore_front_matter or deps.config_loader.ignore_front_matter,
            )
            result = use_case.execute(
                files,
                config,
                jobs=jobs or deps.config_loader.jobs,
                cancel_event=threading.Event(),
            )
            reporter = deps.json_reporter if json_output else deps.text_reporter
            reporter.report(result, show_aliases=show_aliases or deps.config_loader.show_aliases)

            if result.has_violations() or result.has_errors():
                sys.exit(EXIT_VIOLATIONS)
            sys.exit(EXIT_CLEAN)

        @app.command(name="rules")
        def list_rules(
            style: Optional[Path] = typer.Option(None, "--style", "-s", help="Style file to load"),  # noqa: B008
        ) -> None:
            """List every rule with its effective state and parameters."""
            config = CLIAppFactory.resolve_or_exit(deps, style)
            for code in deps.registry.codes():
                rule = deps.registry.lookup(code)
                rule_config = config[code]
                state = "enabled " if rule_config.enabled else "disabled"
                line = f"{code} {state} {rule.alias:<30} {rule.description}"
                if rule_config.params:
                    shown = ", ".join(f"{k}={v!r}" for k, v in sorted(rule_config.params.items()))
                    line += f" ({shown})"
                typer.echo(line)

        return app
