"""Flask extension singletons shared by the gateway.

``db`` persists accounts, ``migrate`` exposes Alembic through ``flask db`` and
``jwt`` carries the signing settings used by the bearer-token adapter.
"""

from __future__ import annotations

import logging

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Constraint names are derived so migrations stay deterministic across backends
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    session_options={"autoflush": False},
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Bind the extensions to ``app``.

    :param app: Application being assembled by the factory.

    Importing :mod:`mediagate.models` here completes the metadata before
    Alembic or ``create_all`` look at it. With ``DB_AUTO_CREATE`` set the
    ``accounts`` table is created on startup, which lets a local SQLite file
    work without running ``flask db upgrade`` first.
    """
    db.init_app(app)

    from mediagate import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    if app.config.get("DB_AUTO_CREATE"):
        with app.app_context():
            db.create_all()
        log.info("db.tables_ensured")
