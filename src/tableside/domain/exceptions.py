"""
Domain exceptions for the table aggregate.

Usage:
    from tableside.domain.exceptions import NotFoundError, InvalidStateError

    raise NotFoundError(f"Table {table_number} not found")
    raise InvalidStateError(f"There is no updatable service for table {number}")

Every exception carries the HTTP status the boundary answers with. The
exception handlers render them as ``{statusCode, error, errormessage}``.
"""

from typing import Any


class TablesideError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context


class NotFoundError(TablesideError):
    """Table, service, order or item does not exist (404)."""

    status_code = 404


class InvalidStateError(TablesideError):
    """Mutation against a closed service, or no active service (409)."""

    status_code = 409


class ValidationError(TablesideError):
    """Malformed patch or request body (400)."""

    status_code = 400


class PersistenceError(TablesideError):
    """Storage call failed or timed out (503)."""

    status_code = 503


class AuthenticationError(TablesideError):
    """Caller identity missing or not recognised (401)."""

    status_code = 401


class ForbiddenError(TablesideError):
    """Caller role may not perform the operation (403)."""

    status_code = 403


class RevisionConflictError(Exception):
    """
    Raised by repositories when the stored revision moved under a writer.

    Never reaches the API: the lifecycle manager retries and converts an
    exhausted retry budget into PersistenceError.
    """

    def __init__(self, table_number: int, expected: int, actual: int | None):
        super().__init__(
            f"Table {table_number} revision conflict: "
            f"expected {expected}, found {actual}"
        )
        self.table_number = table_number
        self.expected = expected
        self.actual = actual
