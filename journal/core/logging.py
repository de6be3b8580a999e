"""Logging setup for entry points."""

import logging

from journal.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.effective_log_level,
        format=settings.LOG_FORMAT,
    )

    # Suppress noisy SQLAlchemy logs unless SQL echo was asked for
    if not settings.DB_ECHO:
        logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
