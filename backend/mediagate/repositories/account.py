"""Account repository for persistence-only lookups."""

from __future__ import annotations

from sqlalchemy import select

from mediagate.models.account import Account, normalize_email
from mediagate.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    It never hashes or verifies passwords and never touches tokens; those
    concerns belong to the service layer.
    """

    model = Account

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account instance or ``None`` when not found.
        :rtype: Account | None
        """
        return self.first_where(email=normalize_email(email))

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an account with the provided email exists."""
        stmt = select(Account.id).where(Account.email == normalize_email(email))
        return self.session.execute(stmt).first() is not None
