"""Configuration directives: a tagged union replayed in order by the resolver."""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Union


@dataclass(frozen=True)
class EnableAll:
    """Enable every rule and reset its params to defaults."""


@dataclass(frozen=True)
class DisableAll:
    """Disable every rule and reset its params to defaults."""


@dataclass(frozen=True)
class SetRule:
    """
    Configure one rule.

    ``enabled=None`` means the directive does not say; the rule is then
    enabled implicitly, matching ``rule 'MD013', :line_length => 100`` in a
    style file. Params are shallow-merged over the rule's current params.
    """

    code: str
    enabled: Optional[bool] = None
    params: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ExcludeRule:
    """Shorthand for ``SetRule(code, enabled=False)``."""

    code: str


@dataclass(frozen=True)
class EnableTag:
    """Enable every rule carrying ``tag``. Params are kept."""

    tag: str


@dataclass(frozen=True)
class ExcludeTag:
    """Disable every rule carrying ``tag``. Params are kept."""

    tag: str


ConfigDirective = Union[EnableAll, DisableAll, SetRule, ExcludeRule, EnableTag, ExcludeTag]
