"""
Error taxonomy for the records backend.

Repositories and services raise these instead of HTTP errors so the
API layer can map each kind to its own status code:

- ValidationError: caller-supplied identifier or payload fails a precondition (400)
- NotFoundError: the requested identifier has no row (404)
- ReferentialConflictError: the storage engine refused a change because
  other rows still reference the target (409)
- StorageError: the storage call itself failed (503)
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for foreign_key_violation
FOREIGN_KEY_VIOLATION_SQLSTATE = "23503"


class RecordsError(Exception):
    """Base class for all errors surfaced at the repository boundary."""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecordsError):
    """Identifier or payload failed a precondition."""

    status_code = 400
    error_type = "validation_error"


class NotFoundError(RecordsError):
    """The requested identifier has no corresponding row."""

    status_code = 404
    error_type = "not_found"


class ReferentialConflictError(RecordsError):
    """Dependent rows still reference the row being changed."""

    status_code = 409
    error_type = "conflict"


class StorageError(RecordsError):
    """The storage engine call failed (connectivity, unexpected constraint, ...)."""

    status_code = 503
    error_type = "storage_error"


def is_foreign_key_violation(exc: SQLAlchemyError) -> bool:
    """Check whether a SQLAlchemy error is a foreign key violation."""
    if not isinstance(exc, IntegrityError):
        return False
    orig = getattr(exc, "orig", None)
    sqlstate: Optional[str] = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == FOREIGN_KEY_VIOLATION_SQLSTATE:
        return True
    return "foreign key" in str(orig if orig is not None else exc).lower()


def classify_storage_error(exc: SQLAlchemyError, action: str) -> RecordsError:
    """
    Translate a SQLAlchemy error into the records error taxonomy.

    Args:
        exc: The error raised by the session
        action: Short description of what was being attempted, used in the message

    Returns:
        ReferentialConflictError for foreign key violations, StorageError otherwise
    """
    if is_foreign_key_violation(exc):
        logger.warning(f"Referential conflict while trying to {action}: {exc}")
        return ReferentialConflictError(f"Cannot {action}: related records exist")
    logger.error(f"Storage failure while trying to {action}: {exc}")
    return StorageError(f"Storage failure while trying to {action}")
