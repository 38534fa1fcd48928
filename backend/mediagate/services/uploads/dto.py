# comments in English; reST docstrings strict
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO


@dataclass(frozen=True, slots=True)
class IncomingFile:
    """
    One file taken from a multipart request.

    The payload may still be the request's spooled stream: its size is
    measured by seeking, and it is only read by :meth:`read` once the file
    has been admitted.

    :param filename: Client-supplied original filename.
    :type filename: str
    :param content_type: Declared media type of the part.
    :type content_type: str | None
    :param data: Buffered payload or a seekable binary stream.
    :type data: bytes | BinaryIO
    """

    filename: str
    content_type: str | None
    data: bytes | BinaryIO

    @property
    def size_bytes(self) -> int:
        if isinstance(self.data, bytes | bytearray):
            return len(self.data)
        position = self.data.tell()
        try:
            return self.data.seek(0, os.SEEK_END)
        finally:
            self.data.seek(position)

    def read(self) -> bytes:
        """Return the whole payload."""
        if isinstance(self.data, bytes | bytearray):
            return bytes(self.data)
        self.data.seek(0)
        return self.data.read()


@dataclass(frozen=True, slots=True)
class StoredObjectOut:
    """
    Result of a successful store.

    :param id: Short id (key prefix before the first dot).
    :type id: str
    :param filename: Storage key.
    :type filename: str
    :param mime_type: Content type recorded with the object.
    :type mime_type: str
    :param size_bytes: Payload length.
    :type size_bytes: int
    :param url: Public URL of the object.
    :type url: str
    """

    id: str
    filename: str
    mime_type: str
    size_bytes: int
    url: str


@dataclass(frozen=True, slots=True)
class ImageEntryOut:
    """
    Listing row exposed to clients.

    :param id: Short id.
    :type id: str
    :param filename: Storage key.
    :type filename: str
    :param url: Public URL.
    :type url: str
    """

    id: str
    filename: str
    url: str


@dataclass(frozen=True, slots=True)
class DeletedObjectOut:
    """
    Result of a delete by short id.

    :param id: Short id that was requested.
    :type id: str
    :param filename: Storage key that was removed.
    :type filename: str
    """

    id: str
    filename: str


@dataclass(frozen=True, slots=True)
class FetchedObjectOut:
    """
    Bytes and headers for a proxied download.

    :param filename: Storage key.
    :type filename: str
    :param data: Object content.
    :type data: bytes
    :param content_type: Media type to answer with.
    :type content_type: str
    """

    filename: str
    data: bytes
    content_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)
