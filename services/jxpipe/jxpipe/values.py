"""Tagged-union model of parsed JSON values."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True, slots=True)
class Null:
    pass


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool


@dataclass(frozen=True, slots=True)
class Number:
    """A JSON number kept as its literal text."""

    text: str


@dataclass(frozen=True, slots=True)
class String:
    value: str


@dataclass(frozen=True, slots=True)
class Array:
    items: Tuple["JsonValue", ...] = ()


@dataclass(frozen=True, slots=True)
class Object:
    """Ordered key/value entries; output element order follows this order."""

    entries: Tuple[Tuple[str, "JsonValue"], ...] = ()


JsonValue = Union[Null, Bool, Number, String, Array, Object]
Container = Union[Array, Object]

NULL = Null()

_VARIANTS = (Null, Bool, Number, String, Array, Object)


def is_container(value: JsonValue) -> bool:
    return isinstance(value, (Array, Object))


def lift(obj: Any) -> JsonValue:
    """Convert a plain parsed JSON value (dict/list/str/...) into the tagged union.

    Values that are already tagged pass through unchanged. ``bool`` is
    checked before ``int`` since it is a subclass of it.
    """
    if isinstance(obj, _VARIANTS):
        return obj
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        return Number(str(obj))
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        return Array(tuple(lift(item) for item in obj))
    if isinstance(obj, dict):
        return Object(tuple((_require_str_key(key), lift(value)) for key, value in obj.items()))
    raise TypeError(f"Cannot represent {obj!r} (type {type(obj).__name__}) as JSON")


def _require_str_key(key: Any) -> str:
    if not isinstance(key, str):
        raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
    return key


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON number literal: {name}")


def _build_object(pairs: list[tuple[str, Any]]) -> Object:
    # Duplicate keys: last value wins, first position is kept.
    merged: dict[str, JsonValue] = {}
    for key, value in pairs:
        merged[key] = lift(value)
    return Object(tuple(merged.items()))


def parse_json(text: str | bytes) -> JsonValue:
    """Parse JSON text straight into tagged values, keeping number literals verbatim."""
    return lift(
        json.loads(
            text,
            object_pairs_hook=_build_object,
            parse_int=Number,
            parse_float=Number,
            parse_constant=_reject_constant,
        )
    )
