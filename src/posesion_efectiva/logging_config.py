"""Structured logging configuration using structlog.

Console output for development, JSON lines when PE_LOG_FORMAT=json.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from .config import config


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def get_console_processors() -> list[Processor]:
    """Get processors for console (development) output."""
    return _shared_processors() + [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def get_json_processors() -> list[Processor]:
    """Get processors for JSON (production) output."""
    return _shared_processors() + [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structured logging.

    Call this once at application startup before any logging occurs.
    """
    level = (level or config.LOG_LEVEL).upper()
    log_format = log_format or config.LOG_FORMAT
    log_level = getattr(logging, level, logging.INFO)

    processors = get_json_processors() if log_format == "json" else get_console_processors()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # PyPDF2 warns on every slightly malformed object in official templates
    for noisy in ("PyPDF2", "httpx", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("pdf_generated", causante="Pérez", size=20480)
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs) -> None:
    """Bind key/values to every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
