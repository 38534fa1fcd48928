"""Tests for the Account model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from mediagate.models import Account


class TestAccount:
    def test_email_normalized_and_unique(self, session):
        a1 = Account(email=" Alice@Example.com ", username="alice")
        session.add(a1)
        session.commit()
        assert a1.email == "alice@example.com"

        a2 = Account(email="alice@example.com", username="alice2")
        session.add(a2)
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_defaults(self, session):
        a = Account(email="d@example.com", username="d")
        session.add(a)
        session.flush()
        assert a.role == "user"
        assert a.full_name == ""
        assert a.password_hash is None
        assert a.created_at is not None

    @pytest.mark.parametrize("bad", ["", "   ", "no-at-sign"])
    def test_rejects_invalid_email(self, bad):
        with pytest.raises(ValueError):
            Account(email=bad, username="x")

    def test_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            Account(email="r@example.com", username="r", role="root")

    def test_repr_mentions_id(self, session):
        a = Account(email="repr@example.com", username="repr")
        session.add(a)
        session.flush()
        assert repr(a) == f"<Account id={a.id}>"
