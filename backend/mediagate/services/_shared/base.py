# mediagate/services/_shared/base.py
from __future__ import annotations

import logging
from http import HTTPStatus

from mediagate.core import errors as api_errors
from mediagate.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
    StorageError,
)
from mediagate.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Common ground for services that touch the account store.

    Subclasses open a unit of work per use case and raise
    :mod:`mediagate.services._shared.errors`; they never build HTTP
    responses. The Flask error handlers call :meth:`translate_exceptions`.
    """

    log = logging.getLogger("mediagate.services")

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Unit of work that commits on clean exit."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Unit of work that never writes."""
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Turn a service error into the :class:`~mediagate.core.errors.APIError`
        answered to the client.

        :param exc: Anything raised inside a service.
        :returns: The HTTP-level error, or ``exc`` itself when it is not a
            :class:`ServiceError`.
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))
        if isinstance(exc, InvalidCredentialsError):
            return api_errors.Unauthorized(str(exc), code=exc.code)
        if isinstance(exc, InvalidTokenError):
            return api_errors.Forbidden(str(exc))
        if isinstance(exc, StorageError):
            # Backend detail stays in the server log
            return api_errors.StorageFailure()
        if isinstance(exc, ServiceError):
            return api_errors.APIError(str(exc), status_code=HTTPStatus.BAD_REQUEST, code=exc.code)
        return exc
