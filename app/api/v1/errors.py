"""Translate service-layer errors to HTTP responses."""

from fastapi import HTTPException, status

from app.services.errors import (
    ConflictError,
    NotFoundError,
    PolicyViolationError,
    ServiceError,
    ValidationFailedError,
)

_STATUS_BY_ERROR: list[tuple[type[ServiceError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PolicyViolationError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationFailedError, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def to_http_exception(exc: ServiceError) -> HTTPException:
    """Map a ServiceError subclass to the matching HTTPException (500 if unknown)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal error",
    )
