"""Tiny helpers shared across test modules."""

from __future__ import annotations

import io
from contextlib import contextmanager

# Smallest byte prefixes recognisable as each format; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 28


@contextmanager
def not_raises(exception: type[BaseException]):
    """Context manager asserting that an exception is *not* raised.

    Parameters
    ----------
    exception: type[BaseException]
        Exception type that should not be raised within the context.
    """
    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc


class CountingStream(io.BytesIO):
    """In-memory stream that counts :meth:`read` calls."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.reads = 0

    def read(self, size: int | None = -1) -> bytes:
        self.reads += 1
        return super().read(size)


def image_part(
    filename: str = "photo.png",
    data: bytes = PNG_BYTES,
    content_type: str = "image/png",
) -> tuple[io.BytesIO, str, str]:
    """Return a ``(stream, filename, content_type)`` tuple for the test client.

    Flask's test client turns such tuples into multipart file parts.
    """
    return io.BytesIO(data), filename, content_type


def bearer(token: str) -> dict[str, str]:
    """Authorization header carrying ``token``."""
    return {"Authorization": f"Bearer {token}"}
