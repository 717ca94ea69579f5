"""Service-layer errors and translation of database integrity failures."""

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE for unique_violation.
UNIQUE_VIOLATION = "23505"


class ServiceError(Exception):
    """Base for errors raised by services; route handlers map subclasses to HTTP status codes."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class NotFoundError(ServiceError):
    """Row does not exist or is not visible to the caller (the two are never distinguished)."""


class PolicyViolationError(ServiceError):
    """Write rejected by an access policy check."""


class ConflictError(ServiceError):
    """Write would violate a uniqueness constraint (duplicate grant, duplicate identity)."""


class ValidationFailedError(ServiceError):
    """Write rejected by a CHECK or foreign-key constraint, or by input validation."""


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error is a uniqueness (or primary-key) violation."""
    orig = exc.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    # sqlite3 has no SQLSTATE; it reports "UNIQUE constraint failed: ..."
    return "unique constraint" in str(orig).lower()


def translate_integrity_error(exc: IntegrityError, conflict_message: str) -> ServiceError:
    """Map an IntegrityError to ConflictError (uniqueness) or ValidationFailedError (anything else)."""
    if is_unique_violation(exc):
        return ConflictError(conflict_message, cause=exc)
    return ValidationFailedError(
        f"Constraint violation: {str(exc.orig).splitlines()[0]}",
        cause=exc,
    )
