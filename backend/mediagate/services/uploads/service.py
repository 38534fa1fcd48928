"""
UploadService
=============

Orchestrates image uploads over the :class:`ObjectStorage` port:

- single and batch stores (validate, name, write),
- newest-first image listing,
- deletion by short id,
- proxied downloads for ``GET /file/<filename>``.

The service is built once per process and shared by reference; it keeps no
mutable state of its own.
"""

from __future__ import annotations

import contextvars
import logging
import mimetypes
import re
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, wait

from mediagate.services._shared.errors import (
    MissingFieldError,
    NoFilesError,
    ObjectNotFoundError,
    TooManyFilesError,
)
from mediagate.services._shared.ports import ObjectStorage
from mediagate.services.uploads.dto import (
    DeletedObjectOut,
    FetchedObjectOut,
    ImageEntryOut,
    IncomingFile,
    StoredObjectOut,
)
from mediagate.services.uploads.naming import ObjectName, ObjectNamer, short_id_of
from mediagate.services.uploads.validator import UploadValidator

log = logging.getLogger(__name__)

IMAGE_NAME_RE = re.compile(r"\.(jpe?g|png|gif|webp)$", re.IGNORECASE)
FALLBACK_CONTENT_TYPE = "image/jpeg"


class UploadService:
    """
    Application service for stored image objects.

    :param storage: Object storage adapter.
    :param validator: Admission rules (types and size ceiling).
    :param namer: Key generator; defaults to UUID4 names.
    :param public_base_url: When set, URLs are ``<base>/file/<filename>``
        instead of the backend's public URL.
    :param max_files: Default batch ceiling.
    :param batch_workers: Upper bound of concurrent writes per batch.
    :param list_limit: Default listing size.
    """

    def __init__(
        self,
        *,
        storage: ObjectStorage,
        validator: UploadValidator | None = None,
        namer: ObjectNamer | None = None,
        public_base_url: str | None = None,
        max_files: int = 10,
        batch_workers: int = 4,
        list_limit: int = 100,
    ) -> None:
        self.storage = storage
        self.validator = validator or UploadValidator()
        self.namer = namer or ObjectNamer()
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self.max_files = max_files
        self.batch_workers = max(1, batch_workers)
        self.list_limit = list_limit

    # ------------------------------------------------------------------ #
    # URLs
    # ------------------------------------------------------------------ #

    def url_for(self, key: str) -> str:
        """Return the client-facing URL for ``key``."""
        if self.public_base_url:
            return f"{self.public_base_url}/file/{key}"
        return self.storage.public_url(key)

    # ------------------------------------------------------------------ #
    # Store
    # ------------------------------------------------------------------ #

    def store(self, upload: IncomingFile) -> StoredObjectOut:
        """
        Validate, name and write one file.

        :param upload: File taken from the request.
        :returns: Stored object description.
        :raises UploadValidationError: Nothing was written.
        :raises StorageWriteError: The backend rejected the write (not retried).
        """
        name, content_type = self._admit(upload)
        return self._put(upload, name, content_type)

    def store_batch(
        self, uploads: Sequence[IncomingFile], max_count: int | None = None
    ) -> list[StoredObjectOut]:
        """
        Store several files as one all-or-nothing response.

        Every file is validated before the first write. Writes then run
        concurrently and are all awaited; results keep input order.

        :param uploads: Files in request order.
        :param max_count: Batch ceiling; defaults to ``max_files``.
        :returns: One result per input file.
        :raises TooManyFilesError: More than ``max_count`` files.
        :raises NoFilesError: No file at all.
        :raises UploadValidationError: Any file is rejected; nothing written.
        :raises StorageWriteError: Any write failed. Siblings that did succeed
            are left in place and logged as orphans.
        """
        limit = self.max_files if max_count is None else max_count
        if len(uploads) > limit:
            raise TooManyFilesError(limit)
        if not uploads:
            raise NoFilesError()

        admitted = [(upload, *self._admit(upload)) for upload in uploads]

        workers = min(self.batch_workers, len(admitted))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="upload") as pool:
            # Writes run in a copy of the caller's context (request id for logs)
            futures = [
                pool.submit(contextvars.copy_context().run, self._put, upload, name, ctype)
                for upload, name, ctype in admitted
            ]
            # Join on every write; a failure does not cancel its siblings
            wait(futures)

        stored: list[StoredObjectOut] = []
        failures: list[BaseException] = []
        for future in futures:
            exc = future.exception()
            if exc is None:
                stored.append(future.result())
            else:
                failures.append(exc)

        if failures:
            if stored:
                log.warning(
                    "upload.batch_orphans",
                    extra={
                        "object_key": [s.filename for s in stored],
                        "file_count": len(stored),
                    },
                )
            raise failures[0]

        log.info("upload.batch_stored", extra={"file_count": len(stored)})
        return stored

    def _admit(self, upload: IncomingFile) -> tuple[ObjectName, str]:
        content_type = self.validator.validate(
            upload.filename, upload.content_type, upload.size_bytes
        )
        return self.namer.name_for(upload.filename), content_type

    def _put(self, upload: IncomingFile, name: ObjectName, content_type: str) -> StoredObjectOut:
        data = upload.read()
        self.storage.put(name.key, data, content_type)
        log.info(
            "upload.stored",
            extra={"object_key": name.key, "size_bytes": len(data)},
        )
        return StoredObjectOut(
            id=name.id,
            filename=name.key,
            mime_type=content_type,
            size_bytes=len(data),
            url=self.url_for(name.key),
        )

    # ------------------------------------------------------------------ #
    # Listing / deletion / download
    # ------------------------------------------------------------------ #

    def list_images(self, limit: int | None = None) -> list[ImageEntryOut]:
        """
        Return newest-first image entries, at most ``limit`` of them.

        Names without an image extension are skipped.
        """
        size = self.list_limit if limit is None else limit
        entries = self.storage.list(limit=size, newest_first=True)
        return [
            ImageEntryOut(id=short_id_of(e.name), filename=e.name, url=self.url_for(e.name))
            for e in entries
            if IMAGE_NAME_RE.search(e.name)
        ][:size]

    def resolve_and_delete(self, short_id: str) -> DeletedObjectOut:
        """
        Delete the object whose key is ``short_id`` plus an extension.

        The backend search may return loose matches; the first entry whose
        name starts with ``short_id + "."`` wins.

        :raises MissingFieldError: ``short_id`` is blank.
        :raises ObjectNotFoundError: No exact-prefix match, or it vanished
            before the delete.
        """
        short_id = (short_id or "").strip()
        if not short_id:
            raise MissingFieldError("id", "Image ID is required")

        prefix = f"{short_id}."
        entries = self.storage.list(search=short_id, limit=self.list_limit)
        match = next((e for e in entries if e.name.startswith(prefix)), None)
        if match is None:
            raise ObjectNotFoundError(short_id)

        self.storage.delete(match.name)
        log.info("upload.deleted", extra={"object_key": match.name})
        return DeletedObjectOut(id=short_id, filename=match.name)

    def fetch(self, filename: str) -> FetchedObjectOut:
        """
        Read an object for proxied download.

        The content type comes from the stored object, then from the listing
        metadata, then from the extension, and finally ``image/jpeg``.

        :raises ObjectNotFoundError: No such object.
        """
        filename = (filename or "").strip()
        if not filename:
            raise ObjectNotFoundError(filename)

        blob = self.storage.get(filename)
        content_type = blob.content_type
        if not content_type:
            entries = self.storage.list(search=filename, limit=self.list_limit)
            entry = next((e for e in entries if e.name == filename), None)
            content_type = entry.content_type if entry else None
        if not content_type:
            content_type = mimetypes.guess_type(filename)[0] or FALLBACK_CONTENT_TYPE
        return FetchedObjectOut(filename=filename, data=blob.data, content_type=content_type)
