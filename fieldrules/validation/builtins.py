"""Builtin Rules

The rules every default registry starts with:

    len?N      exact length of a string or collection
    min?N      minimum length, or minimum numeric value
    max?N      maximum length, or maximum numeric value
    nonzero    value must not be its type's zero value
    regexp?P   string must contain a match for pattern P

All share the rule signature ``(value, params) -> RuleError | None``.
None passes every rule except nonzero: absence is only a violation when
something asks for presence.
"""
from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from decimal import Decimal, InvalidOperation
from functools import lru_cache, wraps
from typing import Any, Callable

from fieldrules.errors import ErrorCode, RuleError
from fieldrules.errors.rules import bad_parameter, rule_violation, type_mismatch

from .fields import is_record, record_field_names

RuleFunc = Callable[[Any, Mapping[str, str]], RuleError | None]

_SIZED = (str, bytes, bytearray, list, tuple, set, frozenset, Mapping)
_NUMERIC = (int, float, Decimal)


def _returns_errors(fn: RuleFunc) -> RuleFunc:
    """Turn RuleErrors raised by parameter helpers into return values."""
    @wraps(fn)
    def wrapper(value: Any, params: Mapping[str, str]) -> RuleError | None:
        try:
            return fn(value, params)
        except RuleError as e:
            return e
    return wrapper


def _param(rule: str, params: Mapping[str, str]) -> str:
    try:
        return params["0"]
    except KeyError:
        raise bad_parameter(rule, "missing argument") from None


def _int_param(rule: str, params: Mapping[str, str]) -> int:
    raw = _param(rule, params)
    try:
        return int(raw)
    except ValueError as e:
        raise bad_parameter(rule, f"expected an integer, got {raw!r}", cause=e) from None


def _numeric_param(rule: str, params: Mapping[str, str], value: Any) -> int | float | Decimal:
    """Parse the argument to a number comparable with value."""
    raw = _param(rule, params)
    try:
        if isinstance(value, Decimal):
            return Decimal(raw)
        if isinstance(value, int):
            try:
                return int(raw)
            except ValueError:
                return float(raw)
        return float(raw)
    except (ValueError, InvalidOperation) as e:
        raise bad_parameter(rule, f"expected a number, got {raw!r}", cause=e) from None


def _is_numeric(value: Any) -> bool:
    return isinstance(value, _NUMERIC) and not isinstance(value, bool)


def _is_sized(value: Any) -> bool:
    return isinstance(value, _SIZED)


# ============================================================================
# Size / Range Rules
# ============================================================================

@_returns_errors
def length(value: Any, params: Mapping[str, str]) -> RuleError | None:
    if value is None:
        return None
    if not _is_sized(value):
        return type_mismatch("len", value)
    if len(value) != _int_param("len", params):
        return rule_violation("invalid length", rule="len", code=ErrorCode.E2003_OUT_OF_RANGE)
    return None


@_returns_errors
def minimum(value: Any, params: Mapping[str, str]) -> RuleError | None:
    if value is None:
        return None
    if _is_sized(value):
        if len(value) < _int_param("min", params):
            return rule_violation("less than min", rule="min", code=ErrorCode.E2003_OUT_OF_RANGE)
        return None
    if _is_numeric(value):
        if value < _numeric_param("min", params, value):
            return rule_violation("less than min", rule="min", code=ErrorCode.E2003_OUT_OF_RANGE)
        return None
    return type_mismatch("min", value)


@_returns_errors
def maximum(value: Any, params: Mapping[str, str]) -> RuleError | None:
    if value is None:
        return None
    if _is_sized(value):
        if len(value) > _int_param("max", params):
            return rule_violation("greater than max", rule="max", code=ErrorCode.E2003_OUT_OF_RANGE)
        return None
    if _is_numeric(value):
        if value > _numeric_param("max", params, value):
            return rule_violation("greater than max", rule="max", code=ErrorCode.E2003_OUT_OF_RANGE)
        return None
    return type_mismatch("max", value)


# ============================================================================
# Presence
# ============================================================================

def _is_zero_leaf(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, Decimal, complex)):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, Collection)):
        return len(value) == 0
    return False


def is_zero(value: Any) -> bool:
    """Whether value is the zero value of its type.

    A record is zero when every one of its fields is zero. Nested records
    are expanded from a work list; each record is expanded once.
    """
    seen: set[int] = set()
    pending = [value]
    while pending:
        current = pending.pop()
        if is_record(current):
            if id(current) not in seen:
                seen.add(id(current))
                pending.extend(getattr(current, name, None) for name in record_field_names(type(current)))
        elif not _is_zero_leaf(current):
            return False
    return True


def nonzero(value: Any, params: Mapping[str, str]) -> RuleError | None:
    if is_zero(value):
        return rule_violation("zero value", rule="nonzero", code=ErrorCode.E2001_REQUIRED_FIELD_MISSING)
    return None


# ============================================================================
# Format
# ============================================================================

@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern)


@_returns_errors
def regexp(value: Any, params: Mapping[str, str]) -> RuleError | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return type_mismatch("regexp", value)
    pattern = _param("regexp", params)
    try:
        compiled = _compile(pattern)
    except re.error as e:
        return bad_parameter("regexp", f"invalid pattern {pattern!r}", cause=e)
    if compiled.search(value) is None:
        return rule_violation("regular expression mismatch", rule="regexp", code=ErrorCode.E2002_INVALID_FORMAT)
    return None


BUILTIN_RULES: dict[str, RuleFunc] = {
    "len": length,
    "max": maximum,
    "min": minimum,
    "nonzero": nonzero,
    "regexp": regexp,
}
