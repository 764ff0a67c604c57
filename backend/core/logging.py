"""Logging configuration."""

from __future__ import annotations

import logging
import logging.config

from .config import settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once per process."""
    global _configured
    if _configured:
        return

    resolved_level = (level or settings.log_level).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "level": resolved_level,
                "handlers": ["console"],
            },
            "loggers": {
                # SQL echo is controlled by DATABASE_ECHO, not the root level.
                "sqlalchemy.engine": {"level": logging.WARNING},
            },
        }
    )
    _configured = True
