"""Process-scope collaborators built once per application.

The storage adapter, token service, hasher and upload service are created in
:func:`init_app` and stored on ``app.extensions["mediagate"]``. Request code
reaches them through :func:`get_gateway`; nothing else holds them globally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

from flask import Flask, current_app

from mediagate.infra.bcrypt.bcrypt_password_hasher import BcryptPasswordHasher
from mediagate.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from mediagate.services._shared.ports import (
    InMemoryObjectStorage,
    ObjectStorage,
    PasswordHasher,
)
from mediagate.services.tokens.service import TokenService
from mediagate.services.uploads.service import UploadService
from mediagate.services.uploads.validator import UploadValidator

EXTENSION_KEY = "mediagate"

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Gateway:
    """Shared, thread-safe collaborators of one application instance."""

    storage: ObjectStorage
    uploads: UploadService
    tokens: TokenService
    hasher: PasswordHasher


def build_storage(app: Flask) -> ObjectStorage:
    """
    Create the object storage adapter selected by ``STORAGE_BACKEND``.

    :raises RuntimeError: Unknown backend, or Supabase without credentials.
    """
    backend = str(app.config.get("STORAGE_BACKEND", "supabase")).lower()
    bucket = app.config.get("STORAGE_BUCKET", "uploads")
    if backend == "memory":
        return InMemoryObjectStorage(base_url=f"memory://{bucket}")
    if backend == "supabase":
        from mediagate.infra.supabase.client import build_supabase_client
        from mediagate.infra.supabase.supabase_object_storage import SupabaseObjectStorage

        client = build_supabase_client(
            app.config.get("SUPABASE_URL"), app.config.get("SUPABASE_KEY")
        )
        return SupabaseObjectStorage(client, bucket=bucket)
    raise RuntimeError(f"Unknown STORAGE_BACKEND {backend!r}")


def build_gateway(
    app: Flask,
    *,
    storage_factory: Callable[[Flask], ObjectStorage] = build_storage,
) -> Gateway:
    """Assemble the collaborators from application config."""
    storage = storage_factory(app)
    uploads = UploadService(
        storage=storage,
        validator=UploadValidator(max_bytes=int(app.config["UPLOAD_MAX_BYTES"])),
        public_base_url=app.config.get("PUBLIC_BASE_URL"),
        max_files=int(app.config["UPLOAD_MAX_FILES"]),
        batch_workers=int(app.config["UPLOAD_BATCH_WORKERS"]),
        list_limit=int(app.config["IMAGE_LIST_LIMIT"]),
    )
    tokens = TokenService(
        provider=JWTTokenProvider(), lifetime=app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    )
    hasher = BcryptPasswordHasher(rounds=int(app.config["BCRYPT_ROUNDS"]))
    return Gateway(storage=storage, uploads=uploads, tokens=tokens, hasher=hasher)


def init_app(
    app: Flask,
    *,
    storage_factory: Callable[[Flask], ObjectStorage] = build_storage,
) -> Gateway:
    """Build the gateway and register it on ``app.extensions``."""
    gateway = build_gateway(app, storage_factory=storage_factory)
    app.extensions[EXTENSION_KEY] = gateway
    log.info("gateway.initialized storage=%s", type(gateway.storage).__name__)
    return gateway


def get_gateway() -> Gateway:
    """Return the gateway of the current application."""
    try:
        return cast(Gateway, current_app.extensions[EXTENSION_KEY])
    except KeyError as exc:
        raise RuntimeError("Gateway is not initialized. Call init_app() first.") from exc
