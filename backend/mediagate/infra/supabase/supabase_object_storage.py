# mediagate/infra/supabase/supabase_object_storage.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from supabase import Client

from mediagate.services._shared.errors import (
    ObjectNotFoundError,
    StorageReadError,
    StorageWriteError,
)
from mediagate.services._shared.ports import ObjectBlob, ObjectEntry, ObjectStorage

log = logging.getLogger(__name__)


def _parse_timestamp(raw: Any) -> datetime | None:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return None


class SupabaseObjectStorage(ObjectStorage):
    """
    :class:`ObjectStorage` adapter over a Supabase Storage bucket.

    Every backend exception is logged with its original text and re-raised as
    the matching service error so no backend detail reaches clients.

    :param client: Supabase client built by
        :func:`mediagate.infra.supabase.client.build_supabase_client`.
    :param bucket: Bucket name (``uploads`` by default).
    """

    def __init__(self, client: Client, bucket: str = "uploads") -> None:
        self._client = client
        self.bucket = bucket

    def _bucket(self):
        return self._client.storage.from_(self.bucket)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def put(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self._bucket().upload(
                path=key,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as exc:
            log.error("storage.put_failed", extra={"object_key": key}, exc_info=True)
            raise StorageWriteError(key) from exc

    def delete(self, key: str) -> None:
        try:
            removed = self._bucket().remove([key])
        except Exception as exc:
            log.error("storage.delete_failed", extra={"object_key": key}, exc_info=True)
            raise StorageReadError("delete", key) from exc
        # Supabase answers an empty list when nothing matched the path
        if not removed:
            raise ObjectNotFoundError(key)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get(self, key: str) -> ObjectBlob:
        try:
            data = self._bucket().download(key)
        except Exception as exc:
            # Download errors do not reliably distinguish absence; ask the listing
            entry = self._find(key)
            if entry is None:
                raise ObjectNotFoundError(key) from exc
            log.error("storage.get_failed", extra={"object_key": key}, exc_info=True)
            raise StorageReadError("get", key) from exc
        return ObjectBlob(data=bytes(data), size_bytes=len(data))

    def list(
        self, search: str | None = None, *, limit: int = 100, newest_first: bool = True
    ) -> list[ObjectEntry]:
        options: dict[str, Any] = {
            "limit": limit,
            "offset": 0,
            "sortBy": {"column": "created_at", "order": "desc" if newest_first else "asc"},
        }
        if search:
            options["search"] = search
        try:
            rows = self._bucket().list(options=options)
        except Exception as exc:
            log.error("storage.list_failed", exc_info=True)
            raise StorageReadError("list") from exc
        return [self._to_entry(row) for row in rows or [] if row.get("name")][:limit]

    def public_url(self, key: str) -> str:
        # storage3 leaves a dangling "?" when no transform options are given
        return str(self._bucket().get_public_url(key)).rstrip("?")

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _find(self, key: str) -> ObjectEntry | None:
        """Return the listing entry named exactly ``key``, if any."""
        candidates = self.list(search=key, limit=100)
        return next((entry for entry in candidates if entry.name == key), None)

    @staticmethod
    def _to_entry(row: dict[str, Any]) -> ObjectEntry:
        metadata = row.get("metadata") or {}
        size = metadata.get("size")
        return ObjectEntry(
            name=row["name"],
            created_at=_parse_timestamp(row.get("created_at")),
            size_bytes=int(size) if size is not None else None,
            content_type=metadata.get("mimetype"),
        )
