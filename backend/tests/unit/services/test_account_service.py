"""Unit tests for :class:`AccountService` with in-memory doubles."""

from __future__ import annotations

import pytest

from mediagate.models import Account
from mediagate.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    MissingFieldError,
    NotFoundError,
    ValidationError,
)
from mediagate.services._shared.ports import PlainPasswordHasher, StubTokenProvider
from mediagate.services.accounts.dto import LoginIn, RegisterIn
from mediagate.services.accounts.service import AccountService
from mediagate.services.tokens.service import TokenService
from tests.factories.account import DEFAULT_PASSWORD, AccountFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def tokens() -> TokenService:
    return TokenService(provider=StubTokenProvider())


@pytest.fixture()
def service(tokens) -> AccountService:
    """Build an AccountService wired to in-memory doubles."""
    return AccountService(hasher=PlainPasswordHasher(), tokens=tokens)


# ------------------------------ Register ---------------------------------- #
class TestRegister:
    def test_defaults_username_role_and_full_name(self, service, session):
        out = service.register(RegisterIn(email="A@X.com ", password="p"))

        assert out.id is not None
        assert out.email == "a@x.com"
        assert out.username == "a"
        assert out.role == "user"
        assert out.full_name == ""

        stored = session.get(Account, out.id)
        assert stored.password_hash == "plain$p"

    def test_keeps_given_profile_fields(self, service):
        out = service.register(
            RegisterIn(
                email="b@x.com", password="p", username="bee", full_name="Bee B", role="admin"
            )
        )
        assert (out.username, out.full_name, out.role) == ("bee", "Bee B", "admin")

    def test_unknown_role_falls_back_to_user(self, service):
        out = service.register(RegisterIn(email="c@x.com", password="p", role="root"))
        assert out.role == "user"

    @pytest.mark.parametrize("role", [5, True, ["admin"], {"name": "admin"}])
    def test_non_string_role_falls_back_to_user(self, service, role):
        out = service.register(RegisterIn(email="r@x.com", password="p", role=role))
        assert out.role == "user"

    def test_duplicate_email_is_a_conflict(self, service):
        service.register(RegisterIn(email="dup@x.com", password="p"))
        with pytest.raises(DuplicateEmailError) as exc:
            service.register(RegisterIn(email="DUP@x.com", password="q"))
        assert str(exc.value) == "Email already exists"

    @pytest.mark.parametrize("email, password", [("", "p"), ("a@x.com", ""), ("  ", "p")])
    def test_blank_credentials_are_rejected(self, service, email, password):
        with pytest.raises(MissingFieldError):
            service.register(RegisterIn(email=email, password=password))

    def test_password_over_72_bytes_is_rejected(self, service):
        with pytest.raises(ValidationError):
            service.register(RegisterIn(email="long@x.com", password="é" * 37))


# ------------------------------ Login ------------------------------------- #
class TestLogin:
    def test_login_issues_token_for_account(self, service, tokens):
        created = service.register(RegisterIn(email="a@x.com", password="p"))

        out = service.login(LoginIn(email="a@x.com", password="p"))

        assert tokens.verify(out.token) == str(created.id)

    def test_login_accepts_factory_bcrypt_hash(self, tokens, session):
        from mediagate.infra.bcrypt.bcrypt_password_hasher import BcryptPasswordHasher

        account = AccountFactory(email="bc@x.com")
        session.flush()
        service = AccountService(hasher=BcryptPasswordHasher(rounds=4), tokens=tokens)

        out = service.login(LoginIn(email="bc@x.com", password=DEFAULT_PASSWORD))
        assert tokens.verify(out.token) == str(account.id)

    def test_unknown_email_and_wrong_password_look_the_same(self, service):
        service.register(RegisterIn(email="a@x.com", password="p"))

        with pytest.raises(InvalidCredentialsError) as unknown:
            service.login(LoginIn(email="nobody@x.com", password="p"))
        with pytest.raises(InvalidCredentialsError) as wrong:
            service.login(LoginIn(email="a@x.com", password="nope"))

        assert str(unknown.value) == str(wrong.value) == "Invalid email or password"

    def test_account_without_hash_cannot_log_in(self, service, session):
        account = AccountFactory(email="nohash@x.com")
        account.password_hash = None
        session.flush()
        with pytest.raises(InvalidCredentialsError):
            service.login(LoginIn(email="nohash@x.com", password=DEFAULT_PASSWORD))

    def test_blank_fields_are_missing(self, service):
        with pytest.raises(MissingFieldError):
            service.login(LoginIn(email="", password="p"))


# ------------------------------ Retrieval --------------------------------- #
class TestRetrieval:
    def test_get_account_accepts_token_subject_string(self, service):
        created = service.register(RegisterIn(email="a@x.com", password="p"))
        assert service.get_account(str(created.id)).email == "a@x.com"

    @pytest.mark.parametrize("account_id", [999999, "999999", "abc"])
    def test_missing_account_is_not_found(self, service, account_id):
        with pytest.raises(NotFoundError) as exc:
            service.get_account(account_id)
        assert str(exc.value) == "User not found"

    def test_profile_projection(self, service):
        created = service.register(RegisterIn(email="p@x.com", password="p", full_name="Pat"))
        profile = service.get_profile(created.id)
        assert profile.id == created.id
        assert profile.username == "p"
        assert profile.full_name == "Pat"
        assert profile.role == "user"
        assert profile.avatar_url is None
