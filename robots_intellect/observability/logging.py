"""Structured logging configuration for the Robots Intellect API."""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict

import structlog

from robots_intellect.enterprise.config.settings import LoggingSettings

# Driver chatter stays at WARNING unless the root level is DEBUG.
_NOISY_LOGGERS = ("pymongo", "pymongo.command", "pymongo.connection", "pymongo.serverSelection")


def _build_structlog_processors(json_output: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(settings: LoggingSettings) -> None:
    """Configure stdlib + structlog logging based on settings."""

    level = getattr(logging, settings.level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    driver_level = level if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(driver_level)

    structlog.configure(
        processors=_build_structlog_processors(settings.json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def bind_global_context(**context: Any) -> Dict[str, Any]:
    """Bind context vars that should be included in all subsequent logs."""

    structlog.contextvars.bind_contextvars(**context)
    return context


def bind_request_context(method: str, path: str) -> None:
    """Attach the current request to log lines emitted while serving it."""

    structlog.contextvars.unbind_contextvars("http_method", "http_path")
    structlog.contextvars.bind_contextvars(http_method=method, http_path=path)
