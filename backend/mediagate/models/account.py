"""Account model: the only persisted aggregate of the gateway."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from mediagate.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

ROLES: tuple[str, ...] = ("user", "admin", "moderator")
DEFAULT_ROLE = "user"


def normalize_email(value: str) -> str:
    """Trim and lowercase an email address."""
    return value.strip().lower()


class Account(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered identity able to obtain bearer tokens.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed) and unique.
    password_hash : str | None
        bcrypt hash. ``None`` marks an account that cannot log in.
    username : str
        Display handle; defaults to the email local part at registration.
    full_name : str
        Optional real name, empty string when not provided.
    role : str
        One of :data:`ROLES`.
    bio : str | None
        Free-form profile text.
    avatar_url : str | None
        Profile picture URL.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(128), nullable=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=DEFAULT_ROLE)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        CheckConstraint("role IN ('user', 'admin', 'moderator')", name="role_allowed"),
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check the email.

        :raises ValueError: If the email is blank or has no ``@``.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Email is required.")
        v = normalize_email(value)
        if "@" not in v:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("role")
    def _validate_role(self, key: str, value: str) -> str:
        if value not in ROLES:
            raise ValueError(f"Unknown role: {value!r}")
        return value
