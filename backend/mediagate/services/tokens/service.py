# mediagate/services/tokens/service.py
from __future__ import annotations

from datetime import timedelta

from mediagate.services._shared.errors import InvalidTokenError
from mediagate.services._shared.ports import TokenProvider

DEFAULT_LIFETIME = timedelta(hours=1)


class TokenService:
    """
    Stateless bearer tokens bound to an account id.

    There is no refresh and no revocation: a token is valid until it expires
    and a client re-authenticates afterwards.

    :param provider: Signing/decoding adapter.
    :param lifetime: Validity window of issued tokens.
    """

    def __init__(self, *, provider: TokenProvider, lifetime: timedelta = DEFAULT_LIFETIME) -> None:
        self.provider = provider
        self.lifetime = lifetime

    def issue(self, subject_id: int | str) -> str:
        """Sign a token for ``subject_id`` expiring ``lifetime`` from now."""
        return self.provider.create_access_token(
            identity=str(subject_id), expires_delta=self.lifetime
        )

    def verify(self, token: str) -> str:
        """
        Return the subject embedded in ``token``.

        :raises InvalidTokenError: Bad signature, malformed token or expired.
        """
        if not token or not token.strip():
            raise InvalidTokenError()
        return self.provider.get_subject(token.strip())
