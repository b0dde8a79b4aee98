"""Path string helpers: basename/dirname, extensions and free filenames."""

from __future__ import annotations

import os
import re
from pathlib import Path

from folderio.exceptions import InvalidPathError
from folderio.utils.mime import extension_from_mime

_SEPARATORS = os.sep + (os.altsep or "")

# "report (3)" -> base "report", counter 3
_NUMBERED_SUFFIX = re.compile(r"^(?P<base>.*\S) \((?P<counter>\d+)\)$")


def basename(path: str) -> str:
    """Return the last segment of ``path``. Trailing separators are ignored."""
    if not path:
        raise InvalidPathError(path)
    trimmed = path.rstrip(_SEPARATORS)
    if not trimmed:
        return path[:1]
    return os.path.basename(trimmed)


def dirname(path: str) -> str:
    """Return ``path`` without its last segment (``"."`` for a bare name)."""
    if not path:
        raise InvalidPathError(path)
    trimmed = path.rstrip(_SEPARATORS)
    if not trimmed:
        return path[:1]
    return os.path.dirname(trimmed) or "."


def resolve_extension(name: str, content_type: str | None, with_dot: bool = True) -> str:
    """Return the extension of ``name``, falling back to one derived from ``content_type``.

    Returns ``""`` when neither source yields an extension, e.g.
    ``("doc", "application/pdf")`` -> ``".pdf"``.
    """
    ext = os.path.splitext(name)[1]
    if not ext:
        derived = extension_from_mime(content_type)
        if not derived:
            return ""
        ext = "." + derived
    return ext if with_dot else ext[1:]


def split_numbered_suffix(stem: str) -> tuple[str, int]:
    """Split ``"name (n)"`` into ``("name", n)``; plain stems give ``(stem, 0)``."""
    match = _NUMBERED_SUFFIX.match(stem)
    if match is None:
        return stem, 0
    return match.group("base"), int(match.group("counter"))


def unique_filename(directory: str | Path, desired_name: str, content_type: str | None = None) -> str:
    """Return a name that does not exist yet in ``directory``.

    A missing extension is derived from ``content_type``. On collision a
    counter is inserted before the extension: ``report (1).pdf``,
    ``report (2).pdf``, ... A desired name that already carries a counter
    keeps counting from it instead of getting a second one.
    """
    if not desired_name:
        raise InvalidPathError(desired_name)
    if any(sep in desired_name for sep in _SEPARATORS):
        raise InvalidPathError(desired_name, "expected a bare file name")

    directory = Path(directory)
    stem, ext = os.path.splitext(desired_name)
    if not ext:
        ext = resolve_extension(desired_name, content_type)

    candidate = stem + ext
    if not os.path.lexists(directory / candidate):
        return candidate

    base, counter = split_numbered_suffix(stem)
    while True:
        counter += 1
        candidate = f"{base} ({counter}){ext}"
        if not os.path.lexists(directory / candidate):
            return candidate
