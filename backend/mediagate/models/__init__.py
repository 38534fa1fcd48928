"""ORM models; importing this package registers every table on the metadata."""

from __future__ import annotations

from mediagate.models.account import Account

__all__ = ["Account"]
