"""Validation Error Report

An ErrorReport maps a field's display key to the failures its rules
produced, in rule evaluation order. A record without failures has no
report at all (validate() returns None), so "any errors?" is a truth test.

Serialized shape:
{
    "error": {
        "type": "validation_error",
        "message": "Validation failed",
        "error_count": 2,
        "fields": {
            "Name": ["is required"],
            "Age": ["less than min"]
        }
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from fieldrules.errors import AppError, ErrorCode, RuleError


class ErrorReport(dict[str, list[RuleError]]):
    """Per-field failures from one validation pass."""

    def add(self, key: str, error: RuleError) -> None:
        self.setdefault(key, []).append(error)

    def extend(self, key: str, errors: Iterable[RuleError]) -> None:
        for error in errors:
            self.add(key, error)

    def merge(self, other: ErrorReport | None) -> None:
        """Fold another report in; keys already present keep their earlier failures first."""
        for key, errors in (other or {}).items():
            self.extend(key, errors)

    @property
    def error_count(self) -> int:
        return sum(len(errors) for errors in self.values())

    def messages(self) -> dict[str, list[str]]:
        return {key: [e.message for e in errors] for key, errors in self.items()}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {"error": {"type": "validation_error", "message": "Validation failed",
            "error_count": self.error_count, "fields": self.messages()}}

    def __str__(self) -> str:
        return "; ".join(f"{key}: {', '.join(e.message for e in errors)}" for key, errors in self.items())


@dataclass
class ValidationError(Exception):
    """Raised when a record fails validation and the caller asked for an exception."""
    message: str
    report: ErrorReport

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if len(self.report) == 1: return f"{self.message}: {self.report}"
        return f"{self.message} ({self.report.error_count} errors)"

    @property
    def field_errors(self) -> dict[str, list[str]]: return self.report.messages()

    def to_dict(self) -> dict[str, Any]:
        payload = self.report.to_dict()
        payload["error"]["message"] = self.message
        return payload

    def to_app_error(self) -> AppError:
        """Convert to AppError for error handling system."""
        return AppError(code=ErrorCode.E2000_VALIDATION_GENERIC, message=self.message,
            metadata={"error_count": self.report.error_count, "fields": self.report.messages()})
