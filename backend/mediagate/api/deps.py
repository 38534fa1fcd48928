"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from werkzeug.datastructures import FileStorage

from mediagate.core.errors import Forbidden, Unauthorized
from mediagate.core.gateway import get_gateway
from mediagate.services.accounts.dto import AccountOut
from mediagate.services.accounts.service import AccountService
from mediagate.services.auth.gate import AuthGate, GateOutcome
from mediagate.services.uploads.dto import IncomingFile

F = TypeVar("F", bound=Callable[..., Any])


def account_service() -> AccountService:
    """Build a request-scoped :class:`AccountService` from the gateway."""
    gateway = get_gateway()
    return AccountService(hasher=gateway.hasher, tokens=gateway.tokens)


def require_account(func: F) -> F:
    """Run the bearer-token gate and attach the account to ``g.current_account``.

    ``NO_HEADER`` / ``NOT_BEARER`` answer 401; ``INVALID_TOKEN`` /
    ``SUBJECT_MISSING`` answer 403.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        gate = AuthGate(tokens=get_gateway().tokens, load_account=account_service().get_account)
        result = gate.authenticate(request.headers.get("Authorization"))
        if result.outcome in (GateOutcome.NO_HEADER, GateOutcome.NOT_BEARER):
            raise Unauthorized(result.message or "No token provided")
        if not result.allowed:
            raise Forbidden(result.message or "Invalid token")
        g.current_account = result.account
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_account() -> AccountOut:
    """Return the account attached by :func:`require_account`."""
    return g.current_account  # type: ignore[no-any-return]


def incoming_file(storage: FileStorage) -> IncomingFile:
    """Wrap one multipart part without reading it.

    Werkzeug spools the part to a seekable stream; the upload service checks
    name, type and size first and reads the bytes only for admitted files.
    """
    return IncomingFile(
        filename=storage.filename or "",
        content_type=storage.mimetype or storage.content_type,
        data=storage.stream,
    )


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
