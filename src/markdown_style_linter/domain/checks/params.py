"""Typed accessors for resolved rule params. The resolver has already validated types."""

from typing import Mapping


def int_param(params: Mapping[str, object], name: str) -> int:
    value = params[name]
    if not isinstance(value, int):
        raise TypeError(f"parameter '{name}' is not an integer: {value!r}")
    return value


def bool_param(params: Mapping[str, object], name: str) -> bool:
    return bool(params[name])


def str_param(params: Mapping[str, object], name: str) -> str:
    return str(params[name])
