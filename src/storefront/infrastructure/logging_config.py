"""Structured logging (structlog routed through stdlib logging).

Log lines go to stderr so command output on stdout stays clean.
Customer emails and phone numbers are masked before rendering.
"""

from __future__ import annotations

import logging.config
import re

import structlog

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

SENSITIVE_KEYS = frozenset({"email", "phone"})


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks customer emails and phone numbers in log values."""
    for key, value in list(event_dict.items()):
        if key in SENSITIVE_KEYS:
            event_dict[key] = "***MASKED***"
        elif isinstance(value, str) and key != "event":
            event_dict[key] = EMAIL_PATTERN.sub("***MASKED***", value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
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
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                    "foreign_pre_chain": _shared_processors,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": level.upper(),
            },
        }
    )
