"""Structured JSON logging for image-vault.

Every event goes through structlog and is rendered as one JSON object per
line on the stdlib root logger, e.g.::

    {"event": "media.upload.stored", "level": "info", "logger": "image_vault.ingest...", ...}
"""

from __future__ import annotations

import logging

import structlog

from .errors import ConfigError

DEFAULT_LOG_LEVEL = "INFO"


def parse_log_level(level: str | int) -> int:
    """Map a level name such as ``"debug"`` (or a numeric level) to its int."""
    if isinstance(level, int):
        return level
    try:
        return logging.getLevelNamesMapping()[level.strip().upper()]
    except KeyError:
        raise ConfigError(f"unknown log level: {level!r}") from None


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> None:
    numeric_level = parse_log_level(level)
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


__all__ = ["DEFAULT_LOG_LEVEL", "configure_logging", "parse_log_level"]
