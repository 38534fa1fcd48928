"""Environment-driven settings for the gateway, one class per deployment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

#: Selects the settings class; one of ``CONFIG_MAP``'s keys
ENV_VAR: Final[str] = "APP_ENV"

MIB: Final[int] = 1024 * 1024
TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

# A missing .env file is fine
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a yes/no flag from the environment.

    :param name: Variable name.
    :param default: Result when the variable is absent.
    :returns: Whether the value is one of :data:`TRUTHY` (case-insensitive).
    """
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer from the environment; blank counts as absent."""
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


class BaseConfig:
    """Settings every deployment starts from.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering blueprints. Empty mounts routes at ``/``.
    PORT: int
        Port advertised to Gunicorn and used in the startup log line.
    PUBLIC_BASE_URL: str | None
        When set, every returned object URL is ``<PUBLIC_BASE_URL>/file/<name>``
        instead of the storage backend's public URL.
    SECRET_KEY: str
        Flask secret. Defaults to a development-safe placeholder.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` for signing bearer tokens.
    JWT_ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Fixed bearer token lifetime (one hour).
    BCRYPT_ROUNDS: int
        bcrypt work factor for credential hashing.
    STORAGE_BACKEND: str
        ``"supabase"`` or ``"memory"``.
    STORAGE_BUCKET: str
        Logical bucket holding every uploaded object.
    SUPABASE_URL, SUPABASE_KEY: str | None
        Object-store endpoint and key (required for the Supabase backend).
    UPLOAD_MAX_BYTES: int
        Per-file size ceiling.
    UPLOAD_MAX_FILES: int
        Maximum files accepted by a batch upload.
    UPLOAD_BATCH_WORKERS: int
        Thread pool size used to fan out batch writes.
    IMAGE_LIST_LIMIT: int
        Maximum entries returned by the image listing.
    FILE_CACHE_MAX_AGE: int
        ``Cache-Control`` max-age for proxied file downloads.
    MAX_CONTENT_LENGTH: int
        Request body ceiling enforced by Werkzeug before buffering.
    SQLALCHEMY_DATABASE_URI: str
        Account datastore connection string consumed by SQLAlchemy.
    DB_AUTO_CREATE: bool
        Create missing tables at startup instead of requiring migrations.
    LOG_LEVEL: str
        Root logger level name.
    CORS_ORIGINS: str
        Comma-separated list of allowed origins; ``*`` allows any.
    CORS_MAX_AGE: int
        Seconds browsers may cache a preflight answer.
    """

    API_BASE_PREFIX = ""
    PORT = env_int("PORT", 3000)
    PUBLIC_BASE_URL = (os.getenv("BASE_URL") or "").rstrip("/") or None

    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "dev-only-jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 10)

    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "supabase").strip().lower()
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "uploads")
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_KEY = os.getenv("SUPABASE_ANON_KEY")

    UPLOAD_MAX_BYTES = env_int("UPLOAD_MAX_BYTES", 10 * MIB)
    UPLOAD_MAX_FILES = 10
    UPLOAD_BATCH_WORKERS = env_int("UPLOAD_BATCH_WORKERS", 4)
    IMAGE_LIST_LIMIT = 100
    FILE_CACHE_MAX_AGE = 365 * 24 * 3600
    # Room for a full batch plus multipart framing
    MAX_CONTENT_LENGTH = UPLOAD_MAX_BYTES * UPLOAD_MAX_FILES + MIB

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    DB_AUTO_CREATE = env_bool("DB_AUTO_CREATE", False)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    CORS_MAX_AGE = 600


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on and tables created on startup."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    DB_AUTO_CREATE = env_bool("DB_AUTO_CREATE", True)


class TestingConfig(BaseConfig):
    """Settings for the pytest suite.

    The database is in-memory SQLite unless ``TEST_DATABASE_URL`` points
    elsewhere, objects live in process memory, and bcrypt runs at its
    minimum cost.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    STORAGE_BACKEND = "memory"
    PUBLIC_BASE_URL = None
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length"
    BCRYPT_ROUNDS = 4
    DB_AUTO_CREATE = False


class ProductionConfig(BaseConfig):
    """Deployed behind Gunicorn; no debug output, no SQL echo."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Pick the settings class named by ``APP_ENV``.

    Unset or unrecognised values select :class:`DevelopmentConfig`.
    """
    selected = os.getenv(ENV_VAR) or "development"
    return CONFIG_MAP.get(selected.strip().lower(), DevelopmentConfig)
