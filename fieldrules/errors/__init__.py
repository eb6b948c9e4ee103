"""Error Handling

- Result[T, E]: Monadic container for success/failure
- AppError: Error value with code, message and context
- ErrorCode: Error code taxonomy
- RuleError: Failure reasons produced by rules and the registry

Usage:
    from fieldrules.errors import Ok, Err, RuleError, UnknownRule

    match registry.lookup("min"):
        case Ok(fn):
            failure = fn(value, params)
        case Err(error):
            log.warning(error.message, code=error.code.name)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    ok,
    err,
)

from .rules import (
    RuleError,
    UnknownRule,
    RuleViolation,
    TypeMismatch,
    BadParameter,
    InvalidRuleFunction,
    unknown_rule,
    rule_violation,
    type_mismatch,
    bad_parameter,
    invalid_rule_function,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "ok",
    "err",
    # Rule failures
    "RuleError",
    "UnknownRule",
    "RuleViolation",
    "TypeMismatch",
    "BadParameter",
    "InvalidRuleFunction",
    "unknown_rule",
    "rule_violation",
    "type_mismatch",
    "bad_parameter",
    "invalid_rule_function",
]
