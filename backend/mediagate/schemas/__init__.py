"""Convenience exports for application schemas."""

from __future__ import annotations

from .account import AccountSchema, ProfileSchema
from .auth import LoginSchema, RegisterSchema, TokenResponseSchema
from .upload import DeletedObjectSchema, ImageEntrySchema, StoredObjectSchema

__all__ = [
    "LoginSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "AccountSchema",
    "ProfileSchema",
    "StoredObjectSchema",
    "ImageEntrySchema",
    "DeletedObjectSchema",
]
