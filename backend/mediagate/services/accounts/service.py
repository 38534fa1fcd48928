"""
AccountService
==============

Application service for the ``Account`` aggregate:

- registration with email uniqueness and role coercion,
- credential login issuing a bearer token,
- account and profile lookups used by the auth gate and ``GET /me``.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from mediagate.models.account import DEFAULT_ROLE, ROLES, Account, normalize_email
from mediagate.repositories.account import AccountRepository
from mediagate.services._shared.base import BaseService
from mediagate.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    MissingFieldError,
    NotFoundError,
    ValidationError,
    violates,
)
from mediagate.services._shared.ports import PasswordHasher
from mediagate.services.accounts.dto import (
    AccountOut,
    LoginIn,
    ProfileOut,
    RegisterIn,
    TokenOut,
)
from mediagate.services.tokens.service import TokenService

MAX_PASSWORD_BYTES = 72


class AccountService(BaseService):
    """
    Registration, login and lookups over accounts.

    :param hasher: Credential hasher.
    :param tokens: Token service used to issue bearer tokens at login.
    """

    def __init__(
        self,
        *,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.hasher = hasher
        self.tokens = tokens

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: RegisterIn) -> AccountOut:
        """
        Create an account.

        Uniqueness is checked with a read before the insert; a concurrent
        registration that slips past the read is caught by the
        ``uq_accounts_email`` constraint and reported the same way.

        :param dto: Registration input.
        :type dto: RegisterIn
        :returns: Public-safe account view.
        :rtype: AccountOut
        :raises MissingFieldError: Email or password blank.
        :raises ValidationError: Password longer than bcrypt accepts.
        :raises DuplicateEmailError: Email already registered.
        """
        email = normalize_email(dto.email or "")
        if not email or not dto.password:
            raise MissingFieldError("email", "Email and password are required")
        if len(dto.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError("Password must be at most 72 bytes")

        role = dto.role if isinstance(dto.role, str) and dto.role in ROLES else DEFAULT_ROLE
        username = (dto.username or "").strip() or email.split("@", 1)[0]
        full_name = (dto.full_name or "").strip()

        with self.rw_uow() as uow:
            repo: AccountRepository = uow.accounts
            if repo.exists_by_email(email):
                raise DuplicateEmailError()

            account = Account(
                email=email,
                password_hash=self.hasher.hash(dto.password),
                username=username,
                full_name=full_name,
                role=role,
            )
            try:
                repo.add(account)
            except IntegrityError as exc:
                if violates(exc, "uq_accounts_email"):
                    raise DuplicateEmailError() from exc
                raise

            out = self._to_account_out(account)

        self.log.info("account.registered", extra={"account_id": out.id})
        return out

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def login(self, dto: LoginIn) -> TokenOut:
        """
        Verify credentials and issue a bearer token.

        Unknown email, an account without a usable hash and a wrong password
        all raise the same :class:`InvalidCredentialsError`.

        :raises MissingFieldError: Email or password blank.
        """
        email = normalize_email(dto.email or "")
        if not email or not dto.password:
            raise MissingFieldError("email", "Email and password are required")

        with self.ro_uow() as uow:
            repo: AccountRepository = uow.accounts
            account = repo.get_by_email(email)
            account_id = account.id if account is not None else None
            stored_hash = account.password_hash if account is not None else None

        if account_id is None or not self.hasher.verify(dto.password, stored_hash):
            self.log.warning("account.login_rejected")
            raise InvalidCredentialsError()

        self.log.info("account.login", extra={"account_id": account_id})
        return TokenOut(token=self.tokens.issue(account_id))

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_account(self, account_id: int | str) -> AccountOut:
        """
        Load an account by id.

        :param account_id: Primary key, as an int or a token subject string.
        :raises NotFoundError: No such account (or a non-numeric id).
        """
        pk = self._coerce_id(account_id)
        with self.ro_uow() as uow:
            account = uow.accounts.get(pk) if pk is not None else None
            if account is None:
                raise NotFoundError("User", account_id)
            return self._to_account_out(account)

    def get_profile(self, account_id: int | str) -> ProfileOut:
        """
        Return the ``GET /me`` projection of an account.

        :raises NotFoundError: The account vanished.
        """
        pk = self._coerce_id(account_id)
        with self.ro_uow() as uow:
            account = uow.accounts.get(pk) if pk is not None else None
            if account is None:
                raise NotFoundError("User", account_id)
            return ProfileOut(
                id=account.id,
                username=account.username,
                full_name=account.full_name or "",
                avatar_url=account.avatar_url,
                role=account.role,
                bio=account.bio,
                updated_at=account.updated_at,
            )

    # --------------------------------------------------------------------- #
    # Mapping
    # --------------------------------------------------------------------- #

    @staticmethod
    def _coerce_id(account_id: int | str) -> int | None:
        try:
            return int(account_id)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _to_account_out(account: Account) -> AccountOut:
        return AccountOut(
            id=account.id,
            email=account.email,
            username=account.username,
            full_name=account.full_name or "",
            role=account.role,
            bio=account.bio,
            avatar_url=account.avatar_url,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
