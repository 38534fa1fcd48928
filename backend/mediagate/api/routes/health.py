"""Liveness and health endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from mediagate.api.deps import json_response, timing
from mediagate.core.extensions import db
from mediagate.core.gateway import get_gateway
from mediagate.services._shared.errors import StorageError

bp = Blueprint("health", __name__)

BANNER = "Image Upload Server is Running 🚀"


@bp.get("/")
def banner():
    """Plain-text liveness banner."""
    return current_app.response_class(BANNER, mimetype="text/plain")


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and storage health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    storage_status = "ok"
    try:
        get_gateway().storage.list(limit=1)
    except StorageError:
        current_app.logger.exception("healthcheck.storage_error")
        storage_status = "fail"

    status = "ok" if db_status == storage_status == "ok" else "degraded"
    return json_response({"status": status, "db": db_status, "storage": storage_status})
