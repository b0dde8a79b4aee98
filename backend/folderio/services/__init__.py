"""Service singletons — persister and file saver wired from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from folderio.config import settings

if TYPE_CHECKING:
    from folderio.services.file_saver import FileSaver
    from folderio.services.persister import StreamingPersister

logger = logging.getLogger(__name__)

_persister: StreamingPersister | None = None
_file_saver: FileSaver | None = None


def init_services() -> None:
    """Create and wire up the service singletons."""
    global _persister, _file_saver

    from folderio.services.file_saver import FileSaver
    from folderio.services.persister import StreamingPersister

    _persister = StreamingPersister(flush_threshold_bytes=settings.flush_threshold_bytes)
    _file_saver = FileSaver(download_dir=settings.download_dir, persister=_persister)
    logger.info(
        "Services initialized (download dir %s, flush every %d bytes)",
        settings.download_dir, settings.flush_threshold_bytes,
    )


def shutdown_services() -> None:
    global _persister, _file_saver
    _persister = None
    _file_saver = None


def get_persister() -> StreamingPersister:
    if _persister is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _persister


def get_file_saver() -> FileSaver:
    if _file_saver is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _file_saver
