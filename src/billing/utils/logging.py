"""Logging configuration for the billing domain.

Standard library logging carries the output (console, plus rotating files
outside of tests) and structlog renders it: JSON in production and staging,
the console renderer everywhere else. Every record is stamped with
``domain="billing"``.

Environment variables:
    PROTEAN_ENV / ENVIRONMENT   selects the log level and renderer
    LOG_LEVEL                   overrides the level derived from the environment
    BILLING_LOG_DIR             directory for the rotating log files (default: logs)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVS = ("production", "staging")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5

_configured = False


def current_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Log level for the current environment, unless LOG_LEVEL overrides it."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_environment(), "INFO")).upper()


def _rotating_file(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _build_handlers(log_level: str, log_dir: str | None, log_file_prefix: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    handlers: list[logging.Handler] = [console]

    if log_dir is None:
        return handlers

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    handlers.append(_rotating_file(log_path / f"{log_file_prefix}.log", log_level))
    handlers.append(_rotating_file(log_path / f"{log_file_prefix}_error.log", logging.ERROR))
    return handlers


def setup_stdlib_logging(log_dir: str | None = "logs", log_file_prefix: str = "billing") -> None:
    """Route the root logger to the console and, when ``log_dir`` is set, to rotating files."""
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = _build_handlers(log_level, log_dir, log_file_prefix)

    logging.getLogger("protean").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _stamp_domain(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("domain", "billing")
    return event_dict


def setup_structlog() -> None:
    """Configure structlog processors and the renderer for the current environment."""
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        _stamp_domain,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    if current_environment() in _JSON_ENVS:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(force: bool = False) -> None:
    """Configure stdlib logging and structlog once per process.

    Tests log to the console only; other environments also write rotating
    files under BILLING_LOG_DIR.
    """
    global _configured
    if _configured and not force:
        return

    log_dir = None if current_environment() == "test" else os.getenv("BILLING_LOG_DIR", "logs")
    setup_stdlib_logging(log_dir=log_dir)
    setup_structlog()
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key/values to every log line emitted in the current context (e.g. a request)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
