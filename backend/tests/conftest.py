"""Shared fixtures: one app per session, one rolled-back transaction per test.

Tests run against in-memory SQLite. Each test gets a SAVEPOINT inside an
outer transaction that is rolled back afterwards, and a fresh in-memory
object store behind the gateway.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from mediagate.core.config import TestingConfig
from mediagate.core.extensions import db as _db
from mediagate.core.gateway import EXTENSION_KEY, build_gateway
from mediagate.factory import create_app
from mediagate.services._shared.ports import InMemoryObjectStorage


@pytest.fixture(scope="session")
def app():
    """The gateway app built from :class:`TestingConfig`."""
    os.environ.pop("DATABASE_URL", None)
    flask_app = create_app(TestingConfig)
    flask_app.logger.setLevel("WARNING")
    return flask_app


@pytest.fixture(scope="session")
def db(app):
    """Create the schema once and drop it when the session ends.

    No application context stays pushed between tests, so every test-client
    request gets its own context and a fresh ``flask.g``.
    """
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Single connection shared by every test; in-memory SQLite lives on it."""
    with app.app_context():
        conn = db.engine.connect()
    yield conn
    conn.close()


@pytest.fixture()
def session(db, connection):
    """
    Scoped session confined to a transaction that is rolled back after the test.

    Notes
    -----
    Code under test may commit or roll back freely: whenever the session
    ends its SAVEPOINT a new one is opened, so the outer transaction stays
    intact until teardown. ``db.session`` is swapped for this session while
    the test runs. Each request's context teardown calls ``remove()`` on it,
    so rows a test sets up for HTTP calls must be committed first.
    """
    outer = connection.begin()
    scoped = scoped_session(sessionmaker(bind=connection, future=True))
    savepoint = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _reopen_savepoint(sess, trans):  # pragma: no cover
        nonlocal savepoint
        if trans.nested and not trans._parent.nested:
            savepoint = connection.begin_nested()

    app_session = db.session
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = app_session
        outer.rollback()


@pytest.fixture(scope="session")
def faker():
    """Seeded :class:`faker.Faker`."""
    from faker import Faker

    Faker.seed(1337)
    return Faker()


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point Factory Boy at the per-test session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


@pytest.fixture()
def storage() -> InMemoryObjectStorage:
    """Fresh in-memory object store for one test."""
    return InMemoryObjectStorage(base_url="memory://uploads")


@pytest.fixture()
def gateway(app, storage):
    """Install a gateway backed by :func:`storage` for the duration of a test."""
    previous = app.extensions[EXTENSION_KEY]
    app.extensions[EXTENSION_KEY] = build_gateway(app, storage_factory=lambda _app: storage)
    try:
        yield app.extensions[EXTENSION_KEY]
    finally:
        app.extensions[EXTENSION_KEY] = previous


@pytest.fixture()
def client(app, gateway):
    """Return a Flask test client wired to the per-test gateway."""
    return app.test_client()


@pytest.fixture()
def freeze_time():
    """Factory returning :func:`freezegun.freeze_time`."""
    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None):
        return _freeze_time(target or "2026-01-01")

    return _factory
