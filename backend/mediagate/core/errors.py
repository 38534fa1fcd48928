"""RFC 7807 Problem Details for every error the gateway answers with.

Routes and services never build error responses themselves: they raise, and
the handlers registered by :func:`init_app` render
``application/problem+json`` bodies of the form::

    {"type", "title", "status", "detail", "instance", "code", "request_id"}

plus an optional ``details`` object (marshmallow field errors).
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from mediagate.core.logger import ensure_request_id

log = logging.getLogger(__name__)

#: Stable ``code`` for errors that only carry an HTTP status
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    500: "internal_server_error",
    503: "service_unavailable",
}


class APIError(Exception):
    """
    An error with a status, a stable code and a client-safe message.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients as ``detail``.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        Machine-readable snake_case identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Extra structured payload rendered under ``details``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        """Serialize into a Problem Details dict."""
        return problem_for(
            self.status_code, self.code, self.message, details=self.details or None
        )


class NotFound(APIError):
    """404 for a missing account, object or route."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    """409 for uniqueness collisions such as a registered email."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class Unauthorized(APIError):
    """401: no usable credential was presented, or login failed."""

    def __init__(self, message: str = "Unauthorized", *, code: str = "unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code=code)


class Forbidden(APIError):
    """403: a bearer token was presented but rejected."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


class StorageFailure(APIError):
    """500 for object-store failures; backend text is never exposed."""

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(
            message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR, code="storage_error"
        )


def problem_for(
    status: int,
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a Problem Details dict for the current request.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Client-safe summary, rendered as ``detail``.
    :param details: Optional structured details.
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def _respond(problem: dict[str, Any], *, cause: BaseException | None = None):
    status = problem["status"]
    if status >= 500:
        log.error("error.%s status=%s", problem["code"], status, exc_info=cause)
    else:
        log.warning("error.%s status=%s detail=%s", problem["code"], status, problem["detail"])
    resp: Response = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp, status


def init_app(app: Flask) -> None:
    """
    Register the Problem Details handlers on ``app``.

    Service errors are translated through
    :meth:`BaseService.translate_exceptions`; database and unexpected errors
    are reported without internal detail. 5xx are logged with tracebacks.
    """
    from mediagate.services._shared.base import BaseService
    from mediagate.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(err.to_problem(), cause=err)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if not isinstance(translated, APIError):  # pragma: no cover - mapping is total
            raise err
        return _respond(translated.to_problem(), cause=err)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_body_too_large(err: RequestEntityTooLarge):
        limit = app.config.get("UPLOAD_MAX_BYTES")
        message = f"File too large (limit is {limit} bytes)"
        return _respond(problem_for(HTTPStatus.BAD_REQUEST, "file_too_large", message))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return _respond(problem_for(status, code, message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        problem = problem_for(
            HTTPStatus.BAD_REQUEST,
            "validation_error",
            "Validation failed",
            details={"errors": err.messages},
        )
        return _respond(problem)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        problem = problem_for(HTTPStatus.CONFLICT, "conflict", "Resource conflict")
        log.error("db.integrity_error", exc_info=err)
        return _respond(problem)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        problem = problem_for(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
        )
        return _respond(problem, cause=err)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        problem = problem_for(
            HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"
        )
        return _respond(problem, cause=err)
