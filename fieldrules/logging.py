"""Structured Logging for fieldrules

- Colored, human-readable dev output
- JSON structured production output
- Context propagation via contextvars

Library loggers sit on top of the stdlib "fieldrules" logger, which carries
only a NullHandler: nothing is printed until the application either
configures stdlib logging or calls configure_logging().
"""
import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from fieldrules.config import get_settings

logging.getLogger("fieldrules").addHandler(logging.NullHandler())


def _add_service_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds library metadata."""
    event_dict.setdefault("service", "fieldrules")
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used in both dev and prod configurations."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_service_info,
    ]


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to settings.LOG_LEVEL.
        json_logs: If True, output JSON format (for production). If False, colored console output.
            Defaults to settings.LOG_JSON.
    """
    settings = get_settings()
    if level is None:
        level = settings.LOG_LEVEL
    if json_logs is None:
        json_logs = settings.LOG_JSON

    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = get_shared_processors()

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    # Formatter for stdlib logger (handles logs from third-party libs)
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def bind_context(**kwargs) -> None:
    """Bind key-value pairs to the current logging context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


class LoggerRegistry:
    """Registry of pre-configured loggers for the library's components."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for the given component."""
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"fieldrules.{name}")
        return cls._loggers[name]


def engine_logger() -> structlog.stdlib.BoundLogger:
    """Logger for validation engine events."""
    return LoggerRegistry.get("engine")


def registry_logger() -> structlog.stdlib.BoundLogger:
    """Logger for rule registration events."""
    return LoggerRegistry.get("registry")


def boundary_logger() -> structlog.stdlib.BoundLogger:
    """Logger for HTTP boundary events."""
    return LoggerRegistry.get("boundary")
