"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import sys

from markdown_style_linter.domain.errors import ConfigurationError
from markdown_style_linter.infrastructure.di.container import MarkdownStyleContainer
from markdown_style_linter.interface.cli import EXIT_CONFIG_ERROR, CLIAppFactory, CLIDependencies
from markdown_style_linter.interface.telemetry import ProjectTelemetry


def build_dependencies(container: MarkdownStyleContainer) -> CLIDependencies:
    """Collect CLI dependencies from the container."""
    return CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        registry=container.get_rule_registry(),
        filesystem=container.get_filesystem(),
        style_loader=container.get_style_loader(),
        resolver=container.get_resolver(),
        selector=container.get_rule_selector(),
        engine=container.get_rule_engine(),
        text_reporter=container.get_reporter(as_json=False),
        json_reporter=container.get_reporter(as_json=True),
    )


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    try:
        container = MarkdownStyleContainer()
    except ConfigurationError as exc:
        # pyproject.toml is read before the app exists.
        ProjectTelemetry("MDSTYLE").error(str(exc))
        sys.exit(EXIT_CONFIG_ERROR)
    app = CLIAppFactory.create_app(build_dependencies(container))
    app()


if __name__ == "__main__":
    main()
