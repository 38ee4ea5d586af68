from typing import TYPE_CHECKING, Any, Optional, cast

from markdown_style_linter.domain.config import ConfigurationLoader
from markdown_style_linter.infrastructure.config_file_loader import ConfigFileLoader
from markdown_style_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from markdown_style_linter.infrastructure.reporters import JsonViolationReporter, TextViolationReporter
from markdown_style_linter.infrastructure.services.rule_registry import RuleRegistry
from markdown_style_linter.infrastructure.style_file_loader import StyleFileLoader
from markdown_style_linter.interface.telemetry import ProjectTelemetry
from markdown_style_linter.use_cases.lint_document import RuleEngine
from markdown_style_linter.use_cases.resolve_config import ConfigurationResolver
from markdown_style_linter.use_cases.select_rules import RuleSelector

if TYPE_CHECKING:
    from markdown_style_linter.domain.protocols import (
        FileSystemProtocol,
        RuleRegistryProtocol,
        StyleLoaderProtocol,
        TelemetryPort,
    )
    from markdown_style_linter.interface.reporters import ViolationReporter


class MarkdownStyleContainer:
    """Dependency Injection Container for the markdown style linter."""

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_dict)

    def _register_defaults(self, config_dict: Optional[dict[str, object]]) -> None:
        """Register default implementations for protocols."""
        if config_dict is None:
            config_dict = ConfigFileLoader.load_config_from_fs()
        self.register_singleton("ConfigurationLoader", ConfigurationLoader(config_dict))

        telemetry = ProjectTelemetry("MDSTYLE", "Markdown style check")
        self.register_singleton("TelemetryPort", telemetry)

        registry = RuleRegistry()
        self.register_singleton("RuleRegistry", registry)
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("StyleFileLoader", StyleFileLoader())

        self.register_singleton("ConfigurationResolver", ConfigurationResolver(registry))
        self.register_singleton("RuleSelector", RuleSelector(registry))
        self.register_singleton("RuleEngine", RuleEngine(registry, telemetry))

        # Interface
        self.register_singleton("TextReporter", TextViolationReporter(registry))
        self.register_singleton("JsonReporter", JsonViolationReporter(registry))

    # Values are heterogeneous services keyed by name.
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_rule_registry(self) -> "RuleRegistryProtocol":
        return cast("RuleRegistryProtocol", self.get("RuleRegistry"))

    def get_filesystem(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_style_loader(self) -> "StyleLoaderProtocol":
        return cast("StyleLoaderProtocol", self.get("StyleFileLoader"))

    def get_resolver(self) -> ConfigurationResolver:
        return cast(ConfigurationResolver, self.get("ConfigurationResolver"))

    def get_rule_selector(self) -> RuleSelector:
        return cast(RuleSelector, self.get("RuleSelector"))

    def get_rule_engine(self) -> RuleEngine:
        return cast(RuleEngine, self.get("RuleEngine"))

    def get_reporter(self, as_json: bool = False) -> "ViolationReporter":
        """Return the JSON or text reporter."""
        return cast("ViolationReporter", self.get("JsonReporter" if as_json else "TextReporter"))
