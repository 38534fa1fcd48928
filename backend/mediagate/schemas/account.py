"""Account resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class AccountSchema(Schema):
    """Public representation of an account (no password hash)."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
    full_name = fields.String()
    role = fields.String(required=True)
    bio = fields.String(allow_none=True)
    avatar_url = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)


class ProfileSchema(Schema):
    """Profile projection returned by ``GET /me``."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String()
    avatar_url = fields.String(allow_none=True)
    role = fields.String(required=True)
    bio = fields.String(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
