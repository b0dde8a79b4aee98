"""Download directory resolution."""

from __future__ import annotations

import logging
from pathlib import Path

from folderio.config import settings

logger = logging.getLogger(__name__)


def get_default_download_dir(create: bool = True) -> Path:
    """Return the configured download directory, creating it if needed."""
    directory = Path(settings.download_dir)
    if create and not directory.is_dir():
        directory.mkdir(parents=True, exist_ok=True)
        logger.info("Created download directory %s", directory)
    return directory
