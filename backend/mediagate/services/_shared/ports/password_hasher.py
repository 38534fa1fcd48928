from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way credential hashing."""

    def hash(self, plaintext: str) -> str:
        """Return a salted hash suitable for storage."""

    def verify(self, plaintext: str, hashed: str | None) -> bool:
        """Return ``True`` only when ``plaintext`` matches ``hashed``.

        An empty or unusable stored hash yields ``False``; it never raises.
        """


class PlainPasswordHasher(PasswordHasher):
    """Reversible marker hasher for unit tests; never use outside tests."""

    PREFIX = "plain$"

    def hash(self, plaintext: str) -> str:
        return f"{self.PREFIX}{plaintext}"

    def verify(self, plaintext: str, hashed: str | None) -> bool:
        if not hashed or not hashed.startswith(self.PREFIX):
            return False
        return hashed == self.hash(plaintext)
