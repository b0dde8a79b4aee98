"""Streaming copy of a FileEntity to disk, gated by a one-shot verification signal."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable
from pathlib import Path
from typing import BinaryIO

from folderio.config import settings
from folderio.exceptions import PersistVerificationFailed
from folderio.models.entities import FileEntity
from folderio.utils.paths import unique_filename

logger = logging.getLogger(__name__)


def make_verification_signal() -> asyncio.Future[bool]:
    """A pending signal on the running loop; resolve it with ``set_result``."""
    return asyncio.get_running_loop().create_future()


def resolved_signal(value: bool) -> asyncio.Future[bool]:
    signal = make_verification_signal()
    signal.set_result(value)
    return signal


class StreamingPersister:
    """Copies a file's byte stream to disk in bounded memory.

    Unflushed bytes are forced to storage once they exceed the flush
    threshold. The verification signal is polled before every chunk; a False
    result stops the copy and removes the destination.
    """

    def __init__(self, flush_threshold_bytes: int | None = None):
        self._flush_threshold = flush_threshold_bytes or settings.flush_threshold_bytes

    @property
    def flush_threshold_bytes(self) -> int:
        return self._flush_threshold

    async def persist(
        self,
        file: FileEntity,
        destination_dir: str | Path,
        verified: Awaitable[bool],
        check: bool = False,
    ) -> bool:
        """Stream ``file`` into ``destination_dir`` under a free name.

        Returns True when the signal resolves True. Otherwise the written file
        is deleted and False is returned, or ``PersistVerificationFailed`` is
        raised when ``check`` is set.
        """
        destination_dir = Path(destination_dir)
        name = unique_filename(destination_dir, file.name, file.content_type)
        target = destination_dir / name

        ok = await self.persist_to_path(file, target, verified)
        if not ok and check:
            raise PersistVerificationFailed(target)
        return ok

    async def persist_to_path(self, file: FileEntity, target: str | Path, verified: Awaitable[bool]) -> bool:
        """Stream ``file`` to exactly ``target``, which must not exist yet."""
        target = Path(target)
        try:
            handle = open(target, "xb")
        except BaseException:
            if asyncio.iscoroutine(verified):
                verified.close()
            raise

        signal = asyncio.ensure_future(verified)
        # A caller's future stays theirs: never cancel it from here
        owned = signal is not verified
        try:
            try:
                written = await self._copy(file, handle, signal)
            finally:
                handle.close()
            ok = await (signal if owned else asyncio.shield(signal))
        except BaseException:
            if owned:
                signal.cancel()
            _remove_partial(target)
            raise

        if not ok:
            target.unlink(missing_ok=True)
            logger.warning(
                "Verification failed for %s: removed %s after %d bytes",
                file.name, target, written,
            )
            return False

        logger.info("Persisted %s to %s (%d bytes)", file.name, target, written)
        return True

    async def _copy(self, file: FileEntity, handle: BinaryIO, signal: asyncio.Future[bool]) -> int:
        written = 0
        unflushed = 0
        stream = file.open_read_stream()
        try:
            while not _rejected(signal):
                try:
                    chunk = await anext(stream)
                except StopAsyncIteration:
                    break
                handle.write(chunk)
                written += len(chunk)
                unflushed += len(chunk)
                if unflushed > self._flush_threshold:
                    await asyncio.to_thread(_sync, handle)
                    unflushed = 0
            else:
                logger.info("Copy of %s stopped after %d bytes: signal rejected", file.name, written)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        await asyncio.to_thread(_sync, handle)
        return written


def _rejected(signal: asyncio.Future[bool]) -> bool:
    if not signal.done():
        return False
    if signal.cancelled() or signal.exception() is not None:
        return True
    return not signal.result()


def _sync(handle: BinaryIO) -> None:
    handle.flush()
    os.fsync(handle.fileno())


def _remove_partial(target: Path) -> None:
    try:
        target.unlink(missing_ok=True)
    except OSError:
        logger.exception("Could not remove partial file %s", target)
