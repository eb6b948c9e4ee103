"""Tag-driven Record Validation

Rules are declared in field metadata as a compact tag and checked by a
Validator that reports every failure of every field in one pass.

Key Features:
- Tag grammar: ``min?3,max?40``, ``nonzero&err=is required``
- Pluggable rule registry with builtin len/min/max/nonzero/regexp
- Dataclass and pydantic model records, nested and in containers
- Flat per-field error report, None when nothing failed
- FastAPI dependency for request bodies

Usage:
    from dataclasses import dataclass, field
    from fieldrules.validation import validate

    @dataclass
    class Signup:
        username: str = field(metadata={"validate": "min?3,max?40"})
        password: str = field(metadata={"validate": "min?8&err=is too short"})

    report = validate(Signup(username="ann", password="short"))
    # {"password": [RuleViolation("is too short")]}
"""

from .tags import (
    RuleSpec,
    TagSpec,
    parse_tag,
)

from .fields import (
    FieldDescriptor,
    ResolvedField,
    describe,
    is_record,
    iter_records,
    resolve,
)

from .builtins import (
    BUILTIN_RULES,
    RuleFunc,
    is_zero,
)

from .registry import (
    RuleRegistry,
    default_registry,
)

from .errors import (
    ErrorReport,
    ValidationError,
)

from .engine import (
    Validator,
    default_validator,
    validate,
    valid,
    check,
    set_tag,
    set_name_tag,
    set_read_name_tag,
    set_validation_func,
    remove_validation_func,
    with_tag,
)

from .boundaries import (
    ValidatedBody,
    validated_body,
)

__all__ = [
    # Tags
    "RuleSpec",
    "TagSpec",
    "parse_tag",
    # Fields
    "FieldDescriptor",
    "ResolvedField",
    "describe",
    "is_record",
    "iter_records",
    "resolve",
    # Rules
    "BUILTIN_RULES",
    "RuleFunc",
    "is_zero",
    "RuleRegistry",
    "default_registry",
    # Report
    "ErrorReport",
    "ValidationError",
    # Engine
    "Validator",
    "default_validator",
    "validate",
    "valid",
    "check",
    "set_tag",
    "set_name_tag",
    "set_read_name_tag",
    "set_validation_func",
    "remove_validation_func",
    "with_tag",
    # Boundaries
    "ValidatedBody",
    "validated_body",
]
