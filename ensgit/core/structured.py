"""Helpers for validating untyped data read from configuration files.

JSON5 parsing hands back plain dicts/lists/scalars. These helpers give
runtime checks plus static narrowing so the loader can reject anything that
does not have the expected shape instead of coercing it.
"""

from __future__ import annotations

from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def is_str_mapping(obj: object) -> TypeGuard[dict[str, str]]:
    """Return True if obj maps non-empty strings to non-empty strings."""
    if not is_str_dict(obj):
        return False
    return all(k.strip() and isinstance(v, str) and v.strip() for k, v in obj.items())


def describe_type(obj: object) -> str:
    """Name of a parsed value's type in JSON terms, for error messages."""
    match obj:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case list():
            return "array"
        case dict():
            return "object"
        case _:
            return type(obj).__name__
