from typing import TypedDict


class ParameterEntry(TypedDict, total=False):
    type: str
    default: object
    choices: list[str]


class RuleRegistryEntry(TypedDict, total=False):
    alias: str
    description: str
    tags: list[str]
    enabled: bool
    params: dict[str, ParameterEntry]


class RuleCatalog(TypedDict, total=False):
    version: int
    rules: dict[str, RuleRegistryEntry]
