"""Upload response schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class StoredObjectSchema(Schema):
    """Single upload result."""

    id = fields.String(required=True)
    filename = fields.String(required=True)
    url = fields.String(required=True)
    size = fields.Integer(attribute="size_bytes")
    mimetype = fields.String(attribute="mime_type")


class ImageEntrySchema(Schema):
    """Listing row; also used for each file of a batch upload."""

    id = fields.String(required=True)
    filename = fields.String(required=True)
    url = fields.String(required=True)


class DeletedObjectSchema(Schema):
    """Delete-by-id result."""

    id = fields.String(required=True)
    filename = fields.String(required=True)
