"""Random object keys for stored uploads."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

from mediagate.services.uploads.validator import extension_of


@dataclass(frozen=True, slots=True)
class ObjectName:
    """
    Identity of a stored object.

    :ivar id: Random short id (UUID4, hyphenated, never contains a dot).
    :ivar key: Storage key, ``f"{id}.{extension}"``.
    :ivar extension: Original extension, case preserved.
    """

    id: str
    key: str
    extension: str


def short_id_of(key: str) -> str:
    """Return the prefix of ``key`` before its first dot."""
    return key.split(".", 1)[0]


def _uuid4_str() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True)
class ObjectNamer:
    """
    Derive a collision-resistant key from the client's filename.

    Uniqueness comes from UUID4 entropy alone; there is no lookup or retry.
    """

    id_factory: Callable[[], str] = field(default=_uuid4_str)

    def name_for(self, original_filename: str) -> ObjectName:
        ext = extension_of(original_filename)
        object_id = self.id_factory()
        return ObjectName(id=object_id, key=f"{object_id}.{ext}", extension=ext)
