"""
Domain exceptions for the ground booking service.

Workflows raise these; the handler registered in ``groundbook.main`` turns
them into JSON responses of the form ``{"detail": ..., "code": ...}``.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Bad or missing input, or a duplicate unique field."""

    status_code = status.HTTP_400_BAD_REQUEST


class SlotUnavailableError(ValidationError):
    """The requested slot already holds a non-cancelled booking."""


class AuthenticationError(DomainException):
    """No credential was presented."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidCredentialError(AuthenticationError):
    """Malformed, expired or badly signed credential."""

    status_code = status.HTTP_403_FORBIDDEN


class AuthorizationError(DomainException):
    """Authenticated caller lacks the admin flag."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(DomainException):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(DomainException):
    """The database rejected or failed a write."""


async def domain_exception_handler(request: Request, exc: DomainException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def persistence_exception_handler(request: Request, exc: SQLAlchemyError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": PersistenceError.__name__},
    )
