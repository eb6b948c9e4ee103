"""FastAPI Exception Handlers

Converts AppErrors and record ValidationErrors raised inside request
handling into structured JSON responses.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fieldrules.logging import boundary_logger

from .types import AppError

log = boundary_logger()


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when an AppError has to leave code that doesn't use the
    Result monad (e.g., FastAPI dependencies).
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def result_to_response(error: AppError) -> JSONResponse:
    """Convert AppError to FastAPI JSONResponse."""
    status_code = error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    """Handle AppErrorException raised in route handlers and dependencies."""
    error = exc.error.with_context(
        request_id=request.headers.get("X-Request-ID"),
        correlation_id=request.headers.get("X-Correlation-ID"),
    )
    return result_to_response(error)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle record ValidationErrors from the tag validator."""
    from fieldrules.validation.errors import ValidationError

    if not isinstance(exc, ValidationError):
        raise exc

    error = exc.to_app_error().with_context(
        correlation_id=request.headers.get("X-Correlation-ID"),
        request_id=request.headers.get("X-Request-ID"),
        origin="validation",
    )
    return result_to_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on a FastAPI app.

    Usage:
        from fieldrules.errors.handlers import register_error_handlers

        app = FastAPI()
        register_error_handlers(app)
    """
    from fieldrules.validation.errors import ValidationError

    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)


def raise_error(error: AppError) -> None:
    """Raise AppError as exception."""
    raise AppErrorException(error)
