"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, storage adapters
and application services.

The translation to HTTP responses (RFC 7807) is handled by
``mediagate/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_accounts_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    # SQLite reports the offending columns instead of the constraint name
    table, _, column = constraint_name.removeprefix("uq_").partition("_")
    return bool(column) and f"{table}.{column}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``code`` is a stable machine-readable identifier reused by the API layer.
    """

    code = "bad_request"


class ValidationError(ServiceError):
    """Raised when input has the wrong shape, type or size."""

    code = "validation_error"


class MissingFieldError(ValidationError):
    """
    Raised when a required field is absent or blank.

    :param field: Name of the missing field.
    :type field: str
    """

    code = "missing_field"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


# --------------------------------------------------------------------------- #
# Upload errors
# --------------------------------------------------------------------------- #


class UploadValidationError(ValidationError):
    """Base for rejected uploads; nothing has been written when raised."""


class UnsupportedFileTypeError(UploadValidationError):
    """Extension or declared content type is not an accepted image type."""

    code = "unsupported_file_type"

    def __init__(self, message: str = "Only image files are allowed!") -> None:
        super().__init__(message)


class FileTooLargeError(UploadValidationError):
    """
    File exceeds the configured per-file size ceiling.

    :param max_bytes: Ceiling that was exceeded.
    :type max_bytes: int
    """

    code = "file_too_large"

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(f"File too large (limit is {max_bytes} bytes)")


class NoFilesError(ValidationError):
    """Raised when an upload request carries no file."""

    code = "no_files"

    def __init__(self, message: str = "No files uploaded") -> None:
        super().__init__(message)


class TooManyFilesError(ValidationError):
    """Raised when a batch exceeds the maximum file count."""

    code = "too_many_files"

    def __init__(self, max_count: int) -> None:
        self.max_count = max_count
        super().__init__(f"Too many files (maximum is {max_count})")


# --------------------------------------------------------------------------- #
# Lookup / conflict errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    code = "not_found"

    def __str__(self) -> str:
        return f"{self.entity} not found"


class ObjectNotFoundError(NotFoundError):
    """Raised by storage adapters when a key is absent."""

    def __init__(self, key: str) -> None:
        super().__init__("Image", key)


@dataclass(slots=True, eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    code = "conflict"

    def __str__(self) -> str:
        return self.detail


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already belongs to an account."""

    def __init__(self) -> None:
        super().__init__("Account", "Email already exists")


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Uniform login failure; never reveals which credential was wrong."""

    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidTokenError(ServiceError):
    """Raised when a bearer token is malformed, badly signed or expired."""

    code = "forbidden"

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Storage errors
# --------------------------------------------------------------------------- #


class StorageError(ServiceError):
    """Base for object-store failures. Backend text stays in the logs."""

    code = "storage_error"


class StorageWriteError(StorageError):
    """The backend refused or failed a write."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Failed to store object {key}")


class StorageReadError(StorageError):
    """The backend failed a read, list or delete for a reason other than absence."""

    def __init__(self, operation: str, key: str | None = None) -> None:
        self.operation = operation
        self.key = key
        super().__init__(f"Storage {operation} failed" + (f" for {key}" if key else ""))
