"""Logging setup for applications embedding folderio."""

from __future__ import annotations

import logging

from folderio.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging with the configured (or given) level."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    # Noisy asyncio debug output
    logging.getLogger("asyncio").setLevel(logging.WARNING)
