"""Upload admission rules: accepted image types and the per-file size ceiling."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from mediagate.services._shared.errors import FileTooLargeError, UnsupportedFileTypeError

_JPEG = frozenset({"image/jpeg", "image/jpg"})

#: Accepted extensions (lowercase) and the content types each may declare
ALLOWED_TYPES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "jpg": _JPEG,
        "jpeg": _JPEG,
        "png": frozenset({"image/png"}),
        "gif": frozenset({"image/gif"}),
        "webp": frozenset({"image/webp"}),
    }
)

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def extension_of(filename: str) -> str:
    """Return the final dot-segment of ``filename`` verbatim, or ``""``."""
    head, sep, ext = filename.rpartition(".")
    if not sep or not ext or "/" in ext or "\\" in ext:
        return ""
    return ext


def normalize_content_type(content_type: str | None) -> str:
    """Drop parameters (``; charset=...``) and lowercase a media type."""
    return (content_type or "").split(";", 1)[0].strip().lower()


@dataclass(frozen=True, slots=True)
class UploadValidator:
    """
    Check an incoming file before anything touches storage.

    The type check runs before the size check, so an oversized file with a
    bad type reports the type error.

    :param max_bytes: Per-file ceiling in bytes (inclusive).
    """

    max_bytes: int = DEFAULT_MAX_BYTES

    def validate(self, filename: str, content_type: str | None, size_bytes: int) -> str:
        """
        Validate one file.

        :param filename: Client-supplied original filename.
        :param content_type: Declared media type of the part.
        :param size_bytes: Payload length.
        :returns: The normalized content type to store with the object.
        :raises UnsupportedFileTypeError: Extension not allowed, content type
            not an image type, or the two do not belong together.
        :raises FileTooLargeError: ``size_bytes`` exceeds ``max_bytes``.
        """
        declared = normalize_content_type(content_type)
        accepted = ALLOWED_TYPES.get(extension_of(filename or "").lower())
        if accepted is None or declared not in accepted:
            raise UnsupportedFileTypeError()
        if size_bytes > self.max_bytes:
            raise FileTooLargeError(self.max_bytes)
        return declared
