"""Domain models for rules, their configuration and violations."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from markdown_style_linter.domain.document import Document


class ViolationKind(str, Enum):
    """Whether a violation is a style finding or an isolated rule failure."""

    STYLE = "style"
    RULE_FAULT = "rule_fault"


@dataclass(frozen=True)
class Violation:
    """A rule violation with code, location and message."""

    code: str
    line: int
    message: str
    end_line: Optional[int] = None
    column: Optional[int] = None
    kind: ViolationKind = ViolationKind.STYLE

    @property
    def is_fault(self) -> bool:
        return self.kind is ViolationKind.RULE_FAULT

    def sort_key(self) -> tuple[int, str, int, str]:
        return (self.line, self.code, self.column or 0, self.message)


class ParamType(str, Enum):
    """Declared type of a rule parameter."""

    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING = "string"
    CHOICE = "choice"


@dataclass(frozen=True)
class RuleParameter:
    """One entry of a rule's parameter schema."""

    name: str
    type: ParamType
    default: object
    choices: tuple[str, ...] = ()

    def describe(self) -> str:
        """Human readable expected type, used in InvalidParameter messages."""
        if self.type is ParamType.CHOICE:
            return "one of " + ", ".join(self.choices)
        return self.type.value

    def accepts(self, value: object) -> bool:
        if self.type is ParamType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self.type is ParamType.BOOLEAN:
            return isinstance(value, bool)
        if self.type is ParamType.STRING:
            return isinstance(value, str)
        return isinstance(value, str) and value in self.choices


class RuleCheck(Protocol):
    """Evaluation contract shared by every rule: a pure function of document and params."""

    def __call__(self, doc: "Document", params: Mapping[str, object]) -> list[Violation]: ...


@dataclass(frozen=True)
class Rule:
    """A catalog entry. The check itself is looked up through the registry."""

    code: str
    alias: str
    description: str
    tags: tuple[str, ...] = ()
    default_enabled: bool = True
    params: Mapping[str, RuleParameter] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(self.code)

    def defaults(self) -> dict[str, object]:
        return {name: p.default for name, p in self.params.items()}


@dataclass(frozen=True)
class RuleConfig:
    """Effective settings for one rule: enabled flag and resolved params."""

    enabled: bool
    params: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate resolved params.
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self) -> int:
        return hash((self.enabled, tuple(sorted(self.params.items(), key=lambda kv: kv[0]))))


@dataclass(frozen=True)
class EffectiveConfig:
    """Rule code -> RuleConfig for one lint run. Built once, never mutated."""

    rules: Mapping[str, RuleConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))

    def __getitem__(self, code: str) -> RuleConfig:
        return self.rules[code]

    def __contains__(self, code: object) -> bool:
        return code in self.rules

    def __iter__(self) -> Iterator[str]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def enabled_codes(self) -> list[str]:
        return sorted(code for code, cfg in self.rules.items() if cfg.enabled)

    def disabled_codes(self) -> list[str]:
        return sorted(code for code, cfg in self.rules.items() if not cfg.enabled)

    def is_enabled(self, code: str) -> bool:
        cfg = self.rules.get(code)
        return bool(cfg and cfg.enabled)
