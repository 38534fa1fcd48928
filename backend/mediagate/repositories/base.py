"""Shared plumbing for SQLAlchemy repositories.

A repository reads and stages rows for one mapped model. It flushes so new
rows get their primary keys, but committing and rolling back belong to the
Unit of Work that handed it a session.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from mediagate.core.extensions import db

M = TypeVar("M")


class BaseRepository(Generic[M]):
    """Lookups and inserts for ``model``; subclasses add named queries.

    :param session: Session owned by the caller's Unit of Work. Without one,
        the Flask-SQLAlchemy scoped session is used.
    """

    model: type[M]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else cast(Session, db.session)

    def _select(self) -> Select[Any]:
        return select(self.model)

    def add(self, instance: M) -> M:
        """Stage ``instance`` and flush it; constraint violations surface here."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def get(self, pk: Any) -> M | None:
        return self.session.get(self.model, pk)

    def first_where(self, **filters: Any) -> M | None:
        """First row whose columns equal ``filters``, or ``None``."""
        stmt = self._select().filter_by(**filters).limit(1)
        return cast("M | None", self.session.execute(stmt).scalars().first())


__all__ = ["BaseRepository"]
