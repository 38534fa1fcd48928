# mediagate/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token as _create_access
from flask_jwt_extended import decode_token as _decode
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from mediagate.services._shared.errors import InvalidTokenError
from mediagate.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Tokens are HS256 JWTs signed with ``JWT_SECRET_KEY`` whose lifetime comes
    from ``JWT_ACCESS_TOKEN_EXPIRES`` unless an explicit delta is given.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return cast(
            str,
            _create_access(
                identity=identity,
                expires_delta=expires_delta,
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            claims = cast(dict[str, Any], _decode(token))
        except (PyJWTError, JWTExtendedException) as exc:
            # Signature, expiry and malformed input all collapse to one outcome
            raise InvalidTokenError() from exc
        if claims.get("type") != "access":
            raise InvalidTokenError()
        return claims

    def get_subject(self, token: str) -> str:
        subject = self.decode(token).get("sub")
        if subject is None or subject == "":
            raise InvalidTokenError()
        return str(subject)
