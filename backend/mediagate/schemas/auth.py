"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate

MAX_PASSWORD_BYTES = 72


def _fits_bcrypt(value: str) -> None:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError("Password must be at most 72 bytes.")


class RegisterSchema(Schema):
    """Input payload for account registration.

    ``role`` is accepted as any JSON value; the service coerces everything
    outside the known roles to ``user``.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=_fits_bcrypt)
    username = fields.String(load_default=None, validate=validate.Length(max=100))
    full_name = fields.String(load_default=None, validate=validate.Length(max=200))
    role = fields.Raw(load_default=None)


class LoginSchema(Schema):
    """Input payload for authenticating an account.

    The email is a plain string so malformed addresses get the same
    ``invalid_credentials`` answer as unknown ones.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1))


class TokenResponseSchema(Schema):
    """Response payload containing a bearer token."""

    token = fields.String(required=True)
