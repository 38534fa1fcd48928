# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Registration input.

    :param email: Login email (normalized by the service).
    :type email: str
    :param password: Plain password; hashed before storage.
    :type password: str
    :param username: Optional handle; defaults to the email local part.
    :type username: str | None
    :param full_name: Optional real name; defaults to ``""``.
    :type full_name: str | None
    :param role: Requested role, as sent; anything outside the allowed set
        (including non-strings) becomes ``user``.
    :type role: object
    """

    email: str
    password: str
    username: str | None = None
    full_name: str | None = None
    role: object = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Login input.

    :param email: Login email.
    :type email: str
    :param password: Plain password candidate.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Public-safe account view (never carries the password hash).

    :param id: Account id.
    :param email: Normalized email.
    :param username: Handle.
    :param full_name: Real name or ``""``.
    :param role: Account role.
    :param bio: Profile text.
    :param avatar_url: Profile picture URL.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: int
    email: str
    username: str
    full_name: str
    role: str
    bio: str | None
    avatar_url: str | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class ProfileOut:
    """
    Projection returned by ``GET /me``.

    :param id: Account id.
    :param username: Handle.
    :param full_name: Real name or ``""``.
    :param avatar_url: Profile picture URL.
    :param role: Account role.
    :param bio: Profile text.
    :param updated_at: Last update timestamp.
    """

    id: int
    username: str
    full_name: str
    avatar_url: str | None
    role: str
    bio: str | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class TokenOut:
    """
    Successful login result.

    :param token: Bearer token.
    :type token: str
    """

    token: str
