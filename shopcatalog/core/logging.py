"""Structured logging — structlog on top of stdlib logging.

Application code logs through ``structlog.get_logger()``. Third-party
loggers (uvicorn, SQLAlchemy, asyncpg) go through the same
``ProcessorFormatter`` so every line has one shape. Per-request keys
(``request_id``, ``method``, ``path``) come from ``structlog.contextvars``.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

import structlog

from shopcatalog.core.config import Settings


def _pre_chain(json_output: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        # tracebacks as structured data instead of one long string
        processors.append(structlog.processors.dict_tracebacks)
    else:
        processors.append(structlog.processors.format_exc_info)
    processors.append(structlog.processors.UnicodeDecoder())
    return processors


def _logger_levels(settings: Settings) -> dict[str, dict[str, Any]]:
    return {
        "shopcatalog": {"level": settings.log_level},
        "uvicorn.error": {"level": "INFO"},
        # request lines come from RequestIDMiddleware
        "uvicorn.access": {"level": "WARNING"},
        "sqlalchemy.engine": {"level": "INFO" if settings.db_echo else "WARNING"},
        "sqlalchemy.pool": {"level": "WARNING"},
        "asyncpg": {"level": "WARNING"},
    }


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging from *settings*.

    ``log_format`` is ``console`` (colored, for development) or ``json``.
    Safe to call more than once; the last call wins.
    """
    settings = settings or Settings.from_env()
    json_output = settings.log_format == "json"
    pre_chain = _pre_chain(json_output)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=not settings.is_production)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "structured",
                },
            },
            "root": {"handlers": ["stdout"], "level": settings.log_level},
            "loggers": _logger_levels(settings),
        }
    )
