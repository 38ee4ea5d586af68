"""Terminal telemetry: progress goes to logging, problems are echoed on stderr."""

import logging
import sys
from typing import Optional

import typer

from markdown_style_linter.domain.protocols import TelemetryPort

LOGGER_NAME = "markdown_style_linter"

_verbose_handler: Optional[logging.Handler] = None


def configure_logging(verbose: bool = False) -> None:
    """With verbose, package logs go to stderr at DEBUG. Otherwise only the NullHandler remains."""
    global _verbose_handler
    logger = logging.getLogger(LOGGER_NAME)
    if _verbose_handler is not None:
        logger.removeHandler(_verbose_handler)
        _verbose_handler = None
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    _verbose_handler = logging.StreamHandler(sys.stderr)
    _verbose_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_verbose_handler)
    logger.setLevel(logging.DEBUG)


class ProjectTelemetry(TelemetryPort):
    """Typer-backed telemetry for the CLI."""

    def __init__(self, project_name: str, welcome_msg: str = "") -> None:
        self.project_name = project_name
        self.welcome_msg = welcome_msg
        self.logger = logging.getLogger(LOGGER_NAME)

    def handshake(self) -> None:
        self.logger.info("%s %s", self.project_name, self.welcome_msg)

    def step(self, message: str) -> None:
        self.logger.info(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)
        typer.secho(f"[{self.project_name}] warning: {message}", fg=typer.colors.YELLOW, err=True)

    def error(self, message: str) -> None:
        self.logger.error(message)
        typer.secho(f"[{self.project_name}] error: {message}", fg=typer.colors.RED, err=True)
