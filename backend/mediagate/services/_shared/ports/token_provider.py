from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from mediagate.services._shared.errors import InvalidTokenError


class TokenProvider(Protocol):
    """Port for signing and decoding bearer tokens.

    Implementations raise :class:`InvalidTokenError` from :meth:`decode` for
    any token that is malformed, badly signed or expired.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...

    def get_subject(self, token: str) -> str: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings remembered in a dict; expiry is evaluated
    against a clock that tests can move with :meth:`advance`.
    """

    def __init__(self, *, lifetime: timedelta = timedelta(hours=1)) -> None:
        self._now = datetime.now(tz=UTC)
        self._lifetime = lifetime
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def advance(self, delta: timedelta) -> None:
        """Move the stub clock forward."""
        self._now += delta

    def create_access_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        self._seq += 1
        token = f"access.{identity}.{self._seq}"
        self._issued[token] = {
            "sub": identity,
            "iat": int(self._now.timestamp()),
            "exp": int((self._now + (expires_delta or self._lifetime)).timestamp()),
        }
        return token

    def decode(self, token: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None:
            raise InvalidTokenError()
        if int(self._now.timestamp()) >= payload["exp"]:
            raise InvalidTokenError("Token has expired")
        return payload

    def get_subject(self, token: str) -> str:
        return str(self.decode(token)["sub"])
