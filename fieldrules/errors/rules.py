"""Rule Failure Types and Builders

Every failure a rule can produce is a RuleError. Rule functions return
(or raise) one; the engine files it under the field's display key.
Registration problems use InvalidRuleFunction and are raised straight
to the caller.
"""
from __future__ import annotations

from typing import Any

from .types import AppError, ErrorCode, ErrorContext


class RuleError(Exception):
    """Base failure reason produced while evaluating a rule."""

    code: ErrorCode = ErrorCode.E2005_CONSTRAINT_VIOLATION

    def __init__(
        self,
        message: str,
        *,
        rule: str | None = None,
        code: ErrorCode | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.rule = rule
        if code is not None:
            self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleError):
            return NotImplemented
        return (type(self), self.code, self.message, self.rule) == (
            type(other), other.code, other.message, other.rule)

    def __hash__(self) -> int:
        return hash((type(self), self.code, self.message, self.rule))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, rule={self.rule!r})"

    def __str__(self) -> str:
        return self.message

    def to_app_error(self, *, field: str | None = None, origin: str = "") -> AppError:
        """Convert to AppError for the error handling system."""
        meta = {"rule": self.rule, "field": field}
        return AppError(
            code=self.code,
            message=self.message,
            context=ErrorContext(origin=origin),
            metadata={k: v for k, v in meta.items() if v is not None},
            cause=self,
        )


class UnknownRule(RuleError):
    """The rule name has no registered function."""
    code = ErrorCode.E2006_UNKNOWN_RULE


class RuleViolation(RuleError):
    """The rule function reported the value invalid."""
    code = ErrorCode.E2005_CONSTRAINT_VIOLATION


class TypeMismatch(RuleError):
    """The rule does not support the runtime type of the value."""
    code = ErrorCode.E2004_INVALID_TYPE


class BadParameter(RuleError):
    """The rule's parameters are missing or cannot be interpreted."""
    code = ErrorCode.E2007_BAD_PARAMETER


class InvalidRuleFunction(RuleError):
    """Registration rejected: the supplied object is not a usable rule function."""
    code = ErrorCode.E9004_INVALID_RULE_FUNCTION


# =============================================================================
# Builders
# =============================================================================

def unknown_rule(name: str) -> UnknownRule:
    return UnknownRule(f"unknown rule '{name}'", rule=name)


def rule_violation(
    message: str,
    *,
    rule: str | None = None,
    code: ErrorCode = ErrorCode.E2005_CONSTRAINT_VIOLATION,
    cause: BaseException | None = None,
) -> RuleViolation:
    return RuleViolation(message, rule=rule, code=code, cause=cause)


def type_mismatch(rule: str, value: Any) -> TypeMismatch:
    return TypeMismatch(f"unsupported type {type(value).__name__}", rule=rule)


def bad_parameter(rule: str, detail: str = "", cause: BaseException | None = None) -> BadParameter:
    msg = "bad parameter"
    if detail:
        msg += f": {detail}"
    return BadParameter(msg, rule=rule, cause=cause)


def invalid_rule_function(name: str, reason: str) -> InvalidRuleFunction:
    return InvalidRuleFunction(f"invalid rule function for '{name}': {reason}", rule=name)
