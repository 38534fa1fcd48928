"""
mediagate.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that the service layer depends
on, together with the in-process doubles used by tests and local runs.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider` (bearer token signing and decoding).

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher` (one-way credential hashing).

- :mod:`object_storage`:
    Defines :class:`~.ObjectStorage` plus :class:`~.ObjectBlob` and
    :class:`~.ObjectEntry` value objects and :class:`~.InMemoryObjectStorage`.

Concrete adapters (Flask-JWT-Extended, bcrypt, Supabase) live under
``mediagate.infra``.
"""

from __future__ import annotations

from .object_storage import InMemoryObjectStorage, ObjectBlob, ObjectEntry, ObjectStorage
from .password_hasher import PasswordHasher, PlainPasswordHasher
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "StubTokenProvider",
    "PasswordHasher",
    "PlainPasswordHasher",
    "ObjectStorage",
    "ObjectBlob",
    "ObjectEntry",
    "InMemoryObjectStorage",
]
