"""Rule registry - maps rule names to rule functions.

Registration is configure-before-use: lookups are safe from any number of
concurrent validations, mutations are not guarded against them.
"""
from __future__ import annotations

import inspect
from typing import Any, Mapping

from fieldrules.errors import AppError, Err, ErrorCode, Ok, Result
from fieldrules.errors.rules import invalid_rule_function
from fieldrules.logging import registry_logger

from .builtins import BUILTIN_RULES, RuleFunc

log = registry_logger()


def _check_rule_func(name: str, fn: Any) -> None:
    if not name:
        raise invalid_rule_function(name, "rule name must not be empty")
    if fn is None:
        raise invalid_rule_function(name, "no function given")
    if not callable(fn):
        raise invalid_rule_function(name, f"{type(fn).__name__} is not callable")
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature; accept them as-is.
        return
    try:
        signature.bind(None, {})
    except TypeError:
        raise invalid_rule_function(name, f"must accept (value, params), has {signature}") from None


class RuleRegistry:
    """Mapping from rule name to rule function."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, RuleFunc] | None = None):
        self._rules: dict[str, RuleFunc] = {}
        for name, fn in (rules or {}).items():
            self.register(name, fn)

    def register(self, name: str, fn: RuleFunc) -> None:
        """Insert or replace a rule. Raises InvalidRuleFunction for unusable functions."""
        _check_rule_func(name, fn)
        replaced = name in self._rules
        self._rules[name] = fn
        log.debug("rule_registered", rule=name, replaced=replaced)

    def remove(self, name: str) -> None:
        if self._rules.pop(name, None) is not None:
            log.debug("rule_removed", rule=name)

    def lookup(self, name: str) -> Result[RuleFunc, AppError]:
        fn = self._rules.get(name)
        if fn is None:
            return Err(AppError(
                code=ErrorCode.E2006_UNKNOWN_RULE,
                message=f"unknown rule '{name}'",
                metadata={"rule": name, "available": self.names()},
            ))
        return Ok(fn)

    def names(self) -> list[str]:
        return sorted(self._rules)

    def copy(self) -> RuleRegistry:
        clone = RuleRegistry()
        clone._rules = dict(self._rules)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({', '.join(self.names())})"


def default_registry() -> RuleRegistry:
    """A new registry holding the builtin rules."""
    return RuleRegistry(BUILTIN_RULES)
