"""Logging setup for applications using the SDK — structlog over stdlib logging.

The SDK itself only calls ``structlog.get_logger("autopilot.<area>")``;
applications that want formatted output call :func:`setup_logging` once.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    Arguments override the environment:
        AUTOPILOT_LOG_LEVEL  — SDK log level (default: INFO)
        AUTOPILOT_LOG_FORMAT — console | json (default: console)
    """
    log_level = (level or os.environ.get("AUTOPILOT_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("AUTOPILOT_LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "loggers": {
                "autopilot": {"handlers": ["default"], "level": log_level, "propagate": False},
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
        }
    )
