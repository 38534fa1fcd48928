"""Unit tests for the SQLAlchemy units of work."""

from __future__ import annotations

import pytest

from mediagate.models import Account
from mediagate.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from mediagate.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.account import AccountFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_commits_on_success(self, db, session):
        initial = db.session.query(Account).count()

        with RWuow() as uow:
            uow.accounts.add(AccountFactory.build())

        assert db.session.query(Account).count() == initial + 1

    def test_rolls_back_on_exception(self, db, session):
        initial = db.session.query(Account).count()

        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.accounts.add(AccountFactory.build())
            raise RuntimeError("boom")

        assert db.session.query(Account).count() == initial


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, db, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(AccountFactory.build())
            uow.session.flush()
        session.rollback()

    def test_allows_reads_of_flushed_rows(self, db, session):
        account = AccountFactory()
        session.flush()

        with ROuow() as uow:
            found = uow.accounts.get_by_email(account.email)
            assert found is not None and found.id == account.id

        # Attaching to a running transaction leaves it intact
        assert db.session.get(Account, account.id) is not None

    def test_disallows_commit(self, db, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_enters_through_scoped_session(self, db, session):
        account = AccountFactory()
        session.commit()

        account_id = account.id

        with ROuow() as uow:
            assert uow.accounts.get(account_id) is not None
            assert uow.session().in_transaction()
