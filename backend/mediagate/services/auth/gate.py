"""
Bearer-token gate.

Each request walks a fixed sequence of checks and stops at the first that
fails. The result is a value, not an exception, so the HTTP layer can map
each outcome to its status code in one place.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from mediagate.services._shared.errors import InvalidTokenError, NotFoundError
from mediagate.services.accounts.dto import AccountOut
from mediagate.services.tokens.service import TokenService

BEARER_PREFIX = "Bearer "


class GateOutcome(Enum):
    """Terminal outcome of :meth:`AuthGate.authenticate`."""

    NO_HEADER = auto()
    NOT_BEARER = auto()
    INVALID_TOKEN = auto()
    SUBJECT_MISSING = auto()
    ATTACHED = auto()


@dataclass(frozen=True, slots=True)
class GateResult:
    """
    Gate decision.

    :ivar outcome: Which terminal state was reached.
    :ivar account: The authenticated account when ``outcome`` is ``ATTACHED``.
    :ivar message: Client-safe message for rejections.
    """

    outcome: GateOutcome
    account: AccountOut | None = None
    message: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.ATTACHED


class AuthGate:
    """
    Resolve an ``Authorization`` header to an account.

    :param tokens: Token service used to verify the bearer token.
    :param load_account: Callable returning the account for a token subject,
        raising :class:`NotFoundError` when it does not exist.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        load_account: Callable[[str], AccountOut],
    ) -> None:
        self.tokens = tokens
        self.load_account = load_account

    def authenticate(self, authorization_header: str | None) -> GateResult:
        if not authorization_header or not authorization_header.strip():
            return GateResult(GateOutcome.NO_HEADER, message="No token provided")

        if not authorization_header.startswith(BEARER_PREFIX):
            return GateResult(GateOutcome.NOT_BEARER, message="No token provided")

        token = authorization_header[len(BEARER_PREFIX) :].strip()
        # An empty bearer credential counts as none presented (401, not 403)
        if not token:
            return GateResult(GateOutcome.NOT_BEARER, message="No token provided")

        try:
            subject = self.tokens.verify(token)
        except InvalidTokenError:
            return GateResult(GateOutcome.INVALID_TOKEN, message="Invalid token")

        try:
            account = self.load_account(subject)
        except NotFoundError:
            return GateResult(
                GateOutcome.SUBJECT_MISSING, message="Invalid token or user not found"
            )

        return GateResult(GateOutcome.ATTACHED, account=account)
