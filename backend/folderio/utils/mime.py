"""MIME-type lookup with the gzip special case."""

from __future__ import annotations

import mimetypes
import re

APPLICATION_GZIP = "application/gzip"
OCTET_STREAM = "application/octet-stream"

# Any name ending in .gz/.tgz with at least one character before the dot.
# mimetypes reports "foo.tar.gz" as application/x-tar with a gzip encoding.
GZIP_PATTERN = re.compile(r".\.(gz|tgz)$")

_EXTENSION_OVERRIDES: dict[str, str] = {
    APPLICATION_GZIP: "gz",
    OCTET_STREAM: "",
}


def lookup_mime_type(path: str) -> str | None:
    """Return the MIME type for ``path`` or ``None`` when unknown."""
    if GZIP_PATTERN.search(path):
        return APPLICATION_GZIP
    mime_type, _encoding = mimetypes.guess_type(path, strict=False)
    return mime_type


def lookup_mime_type_with_default(path: str) -> str:
    return lookup_mime_type(path.lower()) or OCTET_STREAM


def extension_from_mime(content_type: str | None) -> str:
    """Return the preferred extension (no dot) for a MIME type, or ``""``."""
    if not content_type:
        return ""
    mime_type = content_type.split(";", 1)[0].strip().lower()
    if mime_type in _EXTENSION_OVERRIDES:
        return _EXTENSION_OVERRIDES[mime_type]
    ext = mimetypes.guess_extension(mime_type, strict=False)
    return ext.lstrip(".") if ext else ""
