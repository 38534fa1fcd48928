"""Factory Boy base wired to the per-test SQLAlchemy session.

The ``_factories_session`` fixture in ``conftest.py`` registers the
SAVEPOINT-backed session before each test; factories resolve it lazily at
build time so they never hold a stale session between tests.
"""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the session of the running test."""

    _session = None

    @classmethod
    def set(cls, session) -> None:
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered session.

        :raises RuntimeError: A factory was used outside the ``session`` fixture.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Persist with ``flush`` so primary keys exist without committing."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
