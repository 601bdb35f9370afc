"""Logging setup applied once at bootstrap."""

import logging

from restaurant_review.core.config import Settings

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings; DEBUG wins over LOG_LEVEL."""
    level_name: str = "DEBUG" if settings.debug else settings.log_level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)
