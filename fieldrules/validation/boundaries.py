"""Validation at the HTTP Boundary

FastAPI dependency that turns a JSON request body into a record and runs
the tag validator over it before the route sees it.

Usage:
    @router.post("/signup")
    async def signup(body: Signup = validated_body(Signup)):
        ...

Shape problems (bad JSON, wrong types) are reported as AppErrors; rule
failures as a ValidationError carrying the full per-field report. Both
become 400 responses once register_error_handlers() is installed.
"""
from typing import Any, Callable, Generic, TypeVar

from fastapi import Depends, Request
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from fieldrules.errors import AppError, ErrorCode
from fieldrules.errors.handlers import raise_error
from fieldrules.logging import boundary_logger

from .engine import Validator, default_validator
from .errors import ValidationError

R = TypeVar("R")

log = boundary_logger()


def _shape_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [{"loc": [str(p) for p in e["loc"]], "msg": e["msg"], "type": e["type"]} for e in exc.errors()]


class ValidatedBody(Generic[R]):
    """FastAPI dependency for a tag-validated request body."""

    def __init__(self, schema: type[R], *, validator: Validator | None = None):
        self.schema = schema
        self.validator = validator
        self._adapter = TypeAdapter(schema)

    def parse(self, data: Any) -> R:
        """Build the record from decoded JSON and validate it."""
        try:
            record = self._adapter.validate_python(data)
        except PydanticValidationError as e:
            raise_error(AppError(
                code=ErrorCode.E2000_VALIDATION_GENERIC,
                message=f"Request body does not match {self.schema.__name__}",
                metadata={"errors": _shape_errors(e)},
            ))

        report = (self.validator or default_validator()).validate(record)
        if report:
            log.info("request_validation_failed", schema=self.schema.__name__, error_count=report.error_count)
            raise ValidationError(message="Request validation failed", report=report)
        return record

    async def __call__(self, request: Request) -> R:
        try:
            body = await request.json()
        except ValueError as e:
            raise_error(AppError(
                code=ErrorCode.E2021_INVALID_JSON,
                message=f"Invalid JSON in request body: {e}",
            ))
        return self.parse(body)


def validated_body(schema: type[R], *, validator: Validator | None = None) -> Callable:
    """FastAPI dependency factory for a tag-validated request body."""
    return Depends(ValidatedBody(schema, validator=validator))
