"""Typed access to the loosely typed argument bag of a tool call.

Values arrive as decoded JSON: numbers may be `int` or `float`, and nothing is
coerced between kinds. None of these helpers mutate the bag.
"""
from __future__ import annotations

from typing import Any, Mapping

from core.errors import MissingParameterError, ParameterError, WrongTypeError
from core.models import OwnerKind, OwnerRef

_ABSENT = object()


def _lookup(bag: Mapping[str, Any], key: str) -> Any:
    value = bag.get(key, _ABSENT)
    return _ABSENT if value is None else value


def _as_int(key: str, value: Any) -> int:
    # bool is an int subclass but never a valid JSON number here
    if isinstance(value, bool):
        raise WrongTypeError(key, "number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise WrongTypeError(key, "integer")
        return int(value)
    raise WrongTypeError(key, "number")


def _as_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise WrongTypeError(key, "string")
    return value


def require_string(bag: Mapping[str, Any], key: str) -> str:
    value = _lookup(bag, key)
    if value is _ABSENT:
        raise MissingParameterError(key)
    value = _as_str(key, value)
    if value == "":
        raise MissingParameterError(key)
    return value


def require_int(bag: Mapping[str, Any], key: str) -> int:
    value = _lookup(bag, key)
    if value is _ABSENT:
        raise MissingParameterError(key)
    value = _as_int(key, value)
    if value == 0:
        raise MissingParameterError(key)
    return value


def optional_string(bag: Mapping[str, Any], key: str, default: str = "") -> str:
    value = _lookup(bag, key)
    if value is _ABSENT:
        return default
    return _as_str(key, value)


def optional_int(bag: Mapping[str, Any], key: str, default: int) -> int:
    value = _lookup(bag, key)
    if value is _ABSENT:
        return default
    return _as_int(key, value)


def optional_string_array(bag: Mapping[str, Any], key: str) -> list[str]:
    """Return the list of strings under `key`, or an empty list if absent."""
    value = _lookup(bag, key)
    if value is _ABSENT:
        return []
    if not isinstance(value, (list, tuple)):
        raise WrongTypeError(key, "array of strings")
    result = []
    for element in value:
        if not isinstance(element, str):
            raise WrongTypeError(key, "array of strings")
        result.append(element)
    return result


def owner_ref(bag: Mapping[str, Any]) -> OwnerRef:
    """Extract `owner` and `owner_type` into an OwnerRef."""
    name = require_string(bag, "owner")
    owner_type = require_string(bag, "owner_type")
    try:
        kind = OwnerKind(owner_type.lower())
    except ValueError:
        raise ParameterError("owner_type must be either 'user' or 'org'") from None
    return OwnerRef(kind=kind, name=name)
