"""Structured logging configuration.

The release host normally supplies its own logger (``context.logger``) and
the plugin's user-facing messages go there. When the plugin runs without a
host logger, the entry points call setup_logging() and report through
structlog instead:
- Pretty console output on a developer machine
- JSON lines in CI or production so pipeline logs stay machine-readable

Usage:
    from semantic_release_jira.logging_config import setup_logging, get_logger

    setup_logging({"CI": "true"})
    logger = get_logger(__name__)
    logger.info("comment_posted", issue_key="ABC-123")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import structlog

_FALSY = {"", "0", "false", "no"}


def setup_logging(env: Mapping[str, str] | None = None, *, force: bool = False) -> None:
    """Configure structlog for the plugin.

    Leaves an existing structlog configuration alone unless ``force`` is
    set, so an embedding application keeps its own setup.

    Args:
        env: Environment mapping. Defaults to os.environ. Reads
             ``CI`` and ``ENVIRONMENT`` to pick JSON output and
             ``LOG_LEVEL`` for the threshold (default INFO).
        force: Reconfigure even if structlog is already configured
    """
    if structlog.is_configured() and not force:
        return

    env = os.environ if env is None else env
    level_name = env.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    in_ci = env.get("CI", "").strip().lower() not in _FALSY
    if in_ci or env.get("ENVIRONMENT") == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # httpx logs every request at INFO; keep that for DEBUG runs only
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        A structlog bound logger
    """
    return structlog.get_logger(name)


class HostLogger:
    """Host-style logger (``log`` / ``error``) backed by structlog.

    Stands in for ``context.logger`` when the host does not provide one,
    e.g. when the plugin is driven from a script.
    """

    def __init__(self, name: str = "semantic_release_jira") -> None:
        self._logger = get_logger(name)

    def log(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
