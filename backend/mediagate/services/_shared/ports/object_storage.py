"""Object storage port and an in-process implementation.

The port describes one flat bucket addressed by key. Adapters translate
backend failures into :class:`StorageWriteError` / :class:`StorageReadError`
and report absent keys as :class:`ObjectNotFoundError`.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from mediagate.services._shared.errors import ObjectNotFoundError, StorageWriteError


@dataclass(frozen=True, slots=True)
class ObjectBlob:
    """
    Bytes of a stored object.

    :ivar data: Raw object content.
    :ivar size_bytes: Length of ``data``.
    :ivar content_type: Content type recorded at write time, when known.
    """

    data: bytes
    size_bytes: int
    content_type: str | None = None


@dataclass(frozen=True, slots=True)
class ObjectEntry:
    """
    Listing row for a stored object.

    :ivar name: Object key.
    :ivar created_at: Creation timestamp (UTC) when the backend reports one.
    :ivar size_bytes: Object size when known.
    :ivar content_type: Stored content type when known.
    """

    name: str
    created_at: datetime | None = None
    size_bytes: int | None = None
    content_type: str | None = None


class ObjectStorage(Protocol):
    """Port for a single flat object bucket."""

    def put(self, key: str, data: bytes, content_type: str) -> None:
        """Write a new object. Never overwrites an existing key."""

    def get(self, key: str) -> ObjectBlob:
        """Read an object or raise :class:`ObjectNotFoundError`."""

    def list(
        self, search: str | None = None, *, limit: int = 100, newest_first: bool = True
    ) -> list[ObjectEntry]:
        """List up to ``limit`` entries whose name contains ``search``."""

    def delete(self, key: str) -> None:
        """Remove an object or raise :class:`ObjectNotFoundError`."""

    def public_url(self, key: str) -> str:
        """Derive the public URL of ``key`` without contacting the backend."""


@dataclass(slots=True)
class _Stored:
    data: bytes
    content_type: str
    created_at: datetime
    seq: int


class InMemoryObjectStorage(ObjectStorage):
    """
    Thread-safe, process-local bucket.

    Used by the testing configuration and by ``STORAGE_BACKEND=memory`` for
    local development. Ordering relies on a monotonic insertion sequence so
    that objects written within the same clock tick still list newest-first.

    :param base_url: Prefix used by :meth:`public_url`.
    :type base_url: str
    """

    def __init__(self, *, base_url: str = "memory://uploads") -> None:
        self._base_url = base_url.rstrip("/")
        self._objects: dict[str, _Stored] = {}
        self._lock = threading.Lock()
        self._seq = itertools.count(1)

    def put(self, key: str, data: bytes, content_type: str) -> None:
        with self._lock:
            if key in self._objects:
                raise StorageWriteError(key)
            self._objects[key] = _Stored(
                data=bytes(data),
                content_type=content_type,
                created_at=datetime.now(tz=UTC),
                seq=next(self._seq),
            )

    def get(self, key: str) -> ObjectBlob:
        with self._lock:
            stored = self._objects.get(key)
        if stored is None:
            raise ObjectNotFoundError(key)
        return ObjectBlob(
            data=stored.data, size_bytes=len(stored.data), content_type=stored.content_type
        )

    def list(
        self, search: str | None = None, *, limit: int = 100, newest_first: bool = True
    ) -> list[ObjectEntry]:
        with self._lock:
            rows = list(self._objects.items())
        if search:
            needle = search.lower()
            rows = [(name, s) for name, s in rows if needle in name.lower()]
        rows.sort(key=lambda row: row[1].seq, reverse=newest_first)
        return [
            ObjectEntry(
                name=name,
                created_at=s.created_at,
                size_bytes=len(s.data),
                content_type=s.content_type,
            )
            for name, s in rows[: max(limit, 0)]
        ]

    def delete(self, key: str) -> None:
        with self._lock:
            if self._objects.pop(key, None) is None:
                raise ObjectNotFoundError(key)

    def public_url(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._objects

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
