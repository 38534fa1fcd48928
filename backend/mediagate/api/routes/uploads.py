"""Image upload, listing, download and deletion endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from mediagate.api.deps import incoming_file, json_response, timing
from mediagate.core.gateway import get_gateway
from mediagate.schemas import DeletedObjectSchema, ImageEntrySchema, StoredObjectSchema
from mediagate.services._shared.errors import NoFilesError

bp = Blueprint("uploads", __name__)

stored_schema = StoredObjectSchema()
entry_schema = ImageEntrySchema()
entries_schema = ImageEntrySchema(many=True)
deleted_schema = DeletedObjectSchema()


@bp.post("/upload")
@timing
def upload_one():
    """Store the multipart field ``image`` and describe the new object."""

    part = request.files.get("image")
    if part is None or not part.filename:
        raise NoFilesError("No file uploaded")
    stored = get_gateway().uploads.store(incoming_file(part))
    body = {"message": "Image uploaded successfully!", **stored_schema.dump(stored)}
    return json_response(body)


@bp.post("/upload-multiple")
@timing
def upload_many():
    """Store every ``images`` part; all of them or none are reported."""

    parts = [part for part in request.files.getlist("images") if part.filename]
    uploads = get_gateway().uploads
    stored = uploads.store_batch([incoming_file(part) for part in parts])
    body = {"message": "Images uploaded successfully!", "files": entries_schema.dump(stored)}
    return json_response(body)


@bp.get("/images")
@timing
def list_images():
    """Newest-first image listing."""

    images = get_gateway().uploads.list_images()
    return json_response(entries_schema.dump(images))


@bp.get("/file/<path:filename>")
@timing
def fetch_file(filename: str):
    """Proxy an object's bytes with long-lived caching headers."""

    fetched = get_gateway().uploads.fetch(filename)
    response = current_app.response_class(fetched.data, mimetype=fetched.content_type)
    response.headers["Content-Length"] = str(fetched.size_bytes)
    max_age = int(current_app.config.get("FILE_CACHE_MAX_AGE", 31536000))
    response.headers["Cache-Control"] = f"public, max-age={max_age}"
    return response


@bp.delete("/images/", defaults={"image_id": ""})
@bp.delete("/images/<image_id>")
@timing
def delete_image(image_id: str):
    """Delete the object whose short id is ``image_id``."""

    deleted = get_gateway().uploads.resolve_and_delete(image_id)
    body = {"message": "Image deleted successfully", **deleted_schema.dump(deleted)}
    return json_response(body)
