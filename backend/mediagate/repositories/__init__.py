"""Repository package exposing persistence-layer access for persisted models."""

from __future__ import annotations

from mediagate.repositories.account import AccountRepository
from mediagate.repositories.base import BaseRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
]
