"""Folder trees rebuilt from flat lists of files that only carry a virtual path."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from folderio.exceptions import InvalidPathError
from folderio.models.entities import Entity, FileEntity, FolderEntity

logger = logging.getLogger(__name__)

VIRTUAL_SEPARATOR = "/"
_RELATIVE_SEGMENTS = frozenset({".", ".."})

Segments = tuple[str, ...]


@dataclass(frozen=True)
class PickedFile:
    """A picked file plus its position relative to the picked folder."""

    virtual_path: str
    file: FileEntity


def split_virtual_path(virtual_path: str) -> Segments:
    """Split on ``/``; empty paths, empty segments and ``.``/``..`` are rejected."""
    if not virtual_path:
        raise InvalidPathError(virtual_path)
    segments = tuple(virtual_path.split(VIRTUAL_SEPARATOR))
    if not all(segments):
        raise InvalidPathError(virtual_path, "empty path segment")
    if any(segment in _RELATIVE_SEGMENTS for segment in segments):
        raise InvalidPathError(virtual_path, "relative path segment")
    return segments


def build_virtual_tree(
    entries: Iterable[tuple[str, FileEntity]],
    name: str,
    path: str | None = None,
) -> FolderEntity:
    """Build a folder named ``name`` from ``(virtual_path, file)`` pairs.

    Virtual paths are relative to the new folder: ``"a.txt"`` becomes a direct
    child, ``"sub/b.txt"`` lands in a child folder ``sub``. Files come first in
    input order, then folders in order of first appearance.
    """
    segmented = [(split_virtual_path(virtual_path), file) for virtual_path, file in entries]
    folder = _build_folder(segmented, name, path or name, datetime.now(timezone.utc))
    logger.debug("Built virtual folder %s from %d files", folder.path, len(segmented))
    return folder


def folder_from_picked_files(picked: Sequence[PickedFile]) -> FolderEntity:
    """Build the tree for a folder upload whose virtual paths start with the folder name.

    The root takes the first segment as its name. Its path is the first file's
    real path minus the virtual remainder, so ``folder/sub/file.txt`` picked
    from ``/tmp/folder/sub/file.txt`` gives ``/tmp/folder``.
    """
    if not picked:
        raise InvalidPathError("", "no picked files to build a folder from")

    first_segments = split_virtual_path(picked[0].virtual_path)
    root_name = first_segments[0]

    entries: list[tuple[Segments, FileEntity]] = []
    for item in picked:
        segments = split_virtual_path(item.virtual_path)
        if len(segments) < 2 or segments[0] != root_name:
            raise InvalidPathError(item.virtual_path, f"not inside picked folder {root_name!r}")
        entries.append((segments[1:], item.file))

    root_path = _root_path(picked[0].file.path, first_segments)
    folder = _build_folder(entries, root_name, root_path, datetime.now(timezone.utc))
    logger.info("Mounted picked folder %s (%d files)", folder.path, len(entries))
    return folder


def _root_path(real_path: str, segments: Segments) -> str:
    remainder = VIRTUAL_SEPARATOR.join(segments[1:])
    normalized = real_path.replace("\\", VIRTUAL_SEPARATOR)
    if normalized.endswith(VIRTUAL_SEPARATOR + remainder):
        return real_path[: len(real_path) - len(remainder) - 1]
    return segments[0]


def _build_folder(
    entries: list[tuple[Segments, FileEntity]],
    name: str,
    path: str,
    modified: datetime,
) -> FolderEntity:
    children: list[Entity] = []
    groups: dict[str, list[tuple[Segments, FileEntity]]] = {}

    for segments, file in entries:
        if len(segments) == 1:
            if file.name != segments[0]:
                raise InvalidPathError(
                    VIRTUAL_SEPARATOR.join(segments),
                    f"leaf segment does not match file name {file.name!r}",
                )
            children.append(file)
        else:
            groups.setdefault(segments[0], []).append((segments[1:], file))

    parent = path.rstrip(VIRTUAL_SEPARATOR)
    for segment, members in groups.items():
        children.append(
            _build_folder(members, segment, f"{parent}{VIRTUAL_SEPARATOR}{segment}", modified)
        )

    # FolderEntity rejects a name used twice at this level
    return FolderEntity(
        name=name,
        path=path,
        last_modified_date=modified,
        children=tuple(children),
    )
