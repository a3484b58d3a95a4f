"""
Logging Configuration
====================

Structured logging for stubgen, built on structlog over the standard
library logging module. Log records go to stderr so generated stubs
written to stdout stay clean.
"""

import logging
import logging.config
import sys
from typing import Any, Dict

import structlog
from structlog.types import Processor


def _configure_structlog(json_output: bool = False) -> None:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logging_config(level: str) -> Dict[str, Any]:
    """Get logging configuration dictionary for the stubgen loggers."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "plain",
                "stream": sys.stderr,
            },
        },
        "loggers": {
            "stubgen": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """
    Setup application logging.

    Args:
        level: Standard logging level name for the stubgen loggers
        json_output: Render events as JSON lines instead of console text
    """
    _configure_structlog(json_output=json_output)
    logging.config.dictConfig(get_logging_config(level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Events always go to the stdlib logger of the same name, so an
    application that never calls setup_logging() only sees what its own
    logging configuration lets through.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)

