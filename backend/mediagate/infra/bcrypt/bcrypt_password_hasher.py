# mediagate/infra/bcrypt/bcrypt_password_hasher.py
from __future__ import annotations

import logging
from dataclasses import dataclass

import bcrypt

from mediagate.services._shared.ports import PasswordHasher

log = logging.getLogger(__name__)

#: bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


@dataclass(slots=True, frozen=True)
class BcryptPasswordHasher(PasswordHasher):
    """
    bcrypt adapter for :class:`PasswordHasher`.

    :param rounds: Work factor (log2 of iterations). ``10`` matches hashes
        produced by the common ``$2a$10$`` / ``$2b$10$`` defaults.
    """

    rounds: int = 10

    def hash(self, plaintext: str) -> str:
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise ValueError("Password exceeds 72 bytes.")
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, plaintext: str, hashed: str | None) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            # Unusable stored hash or oversized candidate; treat as mismatch
            log.warning("bcrypt.verify_rejected_input")
            return False
