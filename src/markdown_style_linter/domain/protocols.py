from typing import TYPE_CHECKING, Iterable, Optional, Protocol

if TYPE_CHECKING:
    from markdown_style_linter.domain.directives import ConfigDirective
    from markdown_style_linter.domain.rules import Rule, RuleCheck


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class RuleRegistryProtocol(Protocol):
    """Read-only catalog of rules, populated once at startup."""

    @property
    def version(self) -> int: ...

    def all_rules(self) -> frozenset["Rule"]: ...

    def codes(self) -> list[str]:
        """Rule codes in catalog order."""
        ...

    def lookup(self, code: str) -> "Rule":
        """Return the rule for a code or alias. Raises UnknownRule."""
        ...

    def rules_with_tag(self, tag: str) -> list["Rule"]: ...

    def tags(self) -> frozenset[str]: ...

    def check_for(self, code: str) -> "RuleCheck": ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def exists(self, path: str) -> bool: ...

    def glob_markdown_files(
        self,
        path: str,
        extensions: Iterable[str],
        exclude: Iterable[str] = (),
    ) -> list[str]:
        """Get all markdown files in path (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...


class StyleLoaderProtocol(Protocol):
    """Turns a style file into an ordered directive sequence."""

    def load(self, path: str) -> list["ConfigDirective"]: ...

    def parse(self, text: str, source: str = "<style>") -> list["ConfigDirective"]: ...


class DocumentSourceProtocol(Protocol):
    """Supplies document text by path."""

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...


class ConfigFileLoaderProtocol(Protocol):
    def load_config_from_fs(self, start: Optional[str] = None) -> dict[str, object]: ...
