"""Validation Engine

Walks a record's fields, runs every rule in each field's tag and collects
all failures into one ErrorReport. Nothing short-circuits: a single pass
reports every violation on every field, including fields of nested
records and of records held in lists, tuples, sets and dict values.

Nested failures land in the same flat report under the nested field's own
key. A record that is already being validated further up the current path
is skipped, so self-referencing graphs terminate. The walk keeps its own
stack, so nesting depth is not bounded by the interpreter recursion limit.

Usage:
    from fieldrules import Validator, default_registry

    v = Validator(registry=default_registry())
    report = v.validate(signup)
    if report:
        return report.to_dict()
"""
from __future__ import annotations

from typing import Any, Iterator

from fieldrules.config import Settings, get_settings
from fieldrules.errors import Err, Ok, RuleError
from fieldrules.errors.rules import rule_violation, unknown_rule
from fieldrules.logging import engine_logger

from .errors import ErrorReport, ValidationError
from .fields import describe, is_record, iter_records, resolve
from .registry import RuleRegistry, default_registry
from .builtins import RuleFunc
from .tags import RuleSpec, TagSpec, parse_tag

DEFAULT_TAG = "validate"
DEFAULT_NAME_TAG = "json"

log = engine_logger()

_DONE = object()


class Validator:
    """Rule registry plus the metadata keys it reads.

    Configure before use: validate() may run concurrently from many
    threads, the set_* methods must not run alongside it.
    """

    __slots__ = ("registry", "tag", "name_tag", "read_name_tag")

    def __init__(
        self,
        *,
        registry: RuleRegistry | None = None,
        tag: str = DEFAULT_TAG,
        name_tag: str = DEFAULT_NAME_TAG,
        read_name_tag: bool = False,
    ):
        self.registry = registry if registry is not None else RuleRegistry()
        self.tag = tag
        self.name_tag = name_tag
        self.read_name_tag = read_name_tag

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Validator:
        """Validator with the builtin rules and metadata keys from configuration."""
        settings = settings or get_settings()
        return cls(
            registry=default_registry(),
            tag=settings.VALIDATE_TAG,
            name_tag=settings.NAME_TAG,
            read_name_tag=settings.READ_NAME_TAG,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_tag(self, name: str) -> None:
        self.tag = name

    def set_name_tag(self, name: str) -> None:
        self.name_tag = name

    def set_read_name_tag(self, enabled: bool) -> None:
        self.read_name_tag = enabled

    def set_validation_func(self, name: str, fn: RuleFunc) -> None:
        """Register or replace a rule. Raises InvalidRuleFunction."""
        self.registry.register(name, fn)

    def remove_validation_func(self, name: str) -> None:
        self.registry.remove(name)

    def copy(self) -> Validator:
        return Validator(
            registry=self.registry.copy(),
            tag=self.tag,
            name_tag=self.name_tag,
            read_name_tag=self.read_name_tag,
        )

    def with_tag(self, name: str) -> Validator:
        """Independent copy reading rules from a different metadata key."""
        clone = self.copy()
        clone.tag = name
        return clone

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, record: Any) -> ErrorReport | None:
        """Validate every field of record. Returns None when nothing failed."""
        report = ErrorReport()
        self._validate_record(record, report)
        log.debug("record_validated", record_type=type(record).__name__, error_count=report.error_count)
        return report or None

    def valid(self, value: Any, tag: str) -> list[RuleError] | None:
        """Run a tag's rules against a single value."""
        errors = self._run_rules("value", value, parse_tag(tag))
        return errors or None

    def check(self, record: Any) -> None:
        """Raise ValidationError carrying the report when record has failures."""
        report = self.validate(record)
        if report:
            raise ValidationError(message="Validation failed", report=report)

    def _validate_record(self, record: Any, report: ErrorReport) -> None:
        """Depth-first walk with an explicit stack of (record, pending children) frames.

        path holds the ids of the records whose frames are on the stack.
        """
        if not is_record(record):
            return
        path = {id(record)}
        stack = [(record, self._check_fields(record, report))]
        while stack:
            current, children = stack[-1]
            child = next(children, _DONE)
            if child is _DONE:
                stack.pop()
                path.discard(id(current))
            elif id(child) not in path:
                path.add(id(child))
                stack.append((child, self._check_fields(child, report)))

    def _check_fields(self, record: Any, report: ErrorReport) -> Iterator[Any]:
        """Run each field's rules, then yield the records it holds before moving on."""
        for descriptor in describe(type(record)):
            field = resolve(
                record,
                descriptor,
                tag=self.tag,
                name_tag=self.name_tag,
                read_name_tag=self.read_name_tag,
            )
            if field is None:
                continue
            if field.tag:
                report.extend(field.key, self._run_rules(field.key, field.value, parse_tag(field.tag)))
            if field.recursable:
                yield from iter_records(field.value)

    def _run_rules(self, key: str, value: Any, specs: TagSpec) -> list[RuleError]:
        errors: list[RuleError] = []
        for spec in specs:
            match self.registry.lookup(spec.name):
                case Err():
                    log.warning("unknown_rule", rule=spec.name, field=key)
                    errors.append(unknown_rule(spec.name))
                    continue
                case Ok(fn):
                    failure = _call_rule(fn, spec, value)
            if failure is None:
                continue
            if spec.custom_error is not None:
                failure = rule_violation(spec.custom_error, rule=spec.name, code=failure.code, cause=failure)
            errors.append(failure)
        return errors


def _call_rule(fn: RuleFunc, spec: RuleSpec, value: Any) -> RuleError | None:
    try:
        failure = fn(value, spec.params)
    except RuleError as e:
        failure = e
    if failure is None or isinstance(failure, RuleError):
        return failure
    # Returned plain messages and other non-RuleError values become violations of this rule.
    return rule_violation(str(failure), rule=spec.name)


# ============================================================================
# Default instance
# ============================================================================

_default = Validator.from_settings()


def default_validator() -> Validator:
    return _default


def validate(record: Any) -> ErrorReport | None:
    return _default.validate(record)


def valid(value: Any, tag: str) -> list[RuleError] | None:
    return _default.valid(value, tag)


def check(record: Any) -> None:
    _default.check(record)


def set_tag(name: str) -> None:
    _default.set_tag(name)


def set_name_tag(name: str) -> None:
    _default.set_name_tag(name)


def set_read_name_tag(enabled: bool) -> None:
    _default.set_read_name_tag(enabled)


def set_validation_func(name: str, fn: RuleFunc) -> None:
    _default.set_validation_func(name, fn)


def remove_validation_func(name: str) -> None:
    _default.remove_validation_func(name)


def with_tag(name: str) -> Validator:
    return _default.with_tag(name)
