"""Logging setup shared by every kinship-graph module.

Events are structlog key/value records rendered as one JSON object per line
and handed to the stdlib root logger, so the CLI's ``--log-level`` and any
host application's handlers both apply. Library modules only ever call
``get_logger(__name__)``; console output belongs to the CLI.
"""
from __future__ import annotations

import logging
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_PROCESSORS = [
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="ISO"),
    structlog.processors.JSONRenderer(),
]


def configure_logging(level: LogLevel = "INFO") -> None:
    """(Re)configure structlog and the root logger for ``level``."""
    numeric = logging.getLevelName(level)
    logging.basicConfig(format="%(message)s", level=numeric)
    logging.getLogger().setLevel(numeric)
    structlog.configure(
        processors=_PROCESSORS,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        # Loggers bound before a level change must pick up the new filter
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "kinship_graph"):
    return structlog.get_logger(name)


# INFO until the CLI reconfigures
configure_logging()
