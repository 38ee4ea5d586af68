"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts
src/ on the import path.
"""

from typing import Callable
from unittest.mock import MagicMock

import pytest

from markdown_style_linter.domain.checks import CHECKS
from markdown_style_linter.domain.directives import EnableAll, ExcludeRule, SetRule
from markdown_style_linter.domain.document import parse
from markdown_style_linter.domain.rules import Violation
from markdown_style_linter.infrastructure.services.rule_registry import RuleRegistry
from markdown_style_linter.use_cases.lint_document import RuleEngine
from markdown_style_linter.use_cases.resolve_config import ConfigurationResolver

SAMPLE_STYLE = """\
all
rule 'MD013', :line_length => 100, :code_blocks => false
rule 'MD009', :br_spaces => 2
exclude_rule 'MD012'
"""

SAMPLE_DIRECTIVES = [
    EnableAll(),
    SetRule("MD013", params={"line_length": 100, "code_blocks": False}),
    SetRule("MD009", params={"br_spaces": 2}),
    ExcludeRule("MD012"),
]


@pytest.fixture(scope="session")
def registry() -> RuleRegistry:
    """The packaged rule registry, loaded once."""
    return RuleRegistry()


@pytest.fixture
def resolver(registry: RuleRegistry) -> ConfigurationResolver:
    return ConfigurationResolver(registry)


@pytest.fixture
def engine(registry: RuleRegistry) -> RuleEngine:
    return RuleEngine(registry, telemetry=MagicMock())


@pytest.fixture
def run_check(registry: RuleRegistry) -> Callable[..., list[Violation]]:
    """Run one rule's check on markdown text with default params plus overrides."""

    def _run(code: str, text: str, front_matter: bool = False, **params: object) -> list[Violation]:
        merged = {**registry.lookup(code).defaults(), **params}
        return CHECKS[code](parse(text, front_matter=front_matter), merged)

    return _run


@pytest.fixture
def sample_style() -> str:
    """Style file text equivalent to sample_directives."""
    return SAMPLE_STYLE


@pytest.fixture
def sample_directives() -> list:
    return list(SAMPLE_DIRECTIVES)
