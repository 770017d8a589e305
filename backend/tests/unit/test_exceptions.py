"""
Unit tests for storage error classification.
"""

from sqlalchemy.exc import IntegrityError, OperationalError

from core.exceptions import (
    NotFoundError,
    ReferentialConflictError,
    StorageError,
    ValidationError,
    classify_storage_error,
    is_foreign_key_violation,
)


def _integrity_error(message: str, pgcode=None) -> IntegrityError:
    orig = Exception(message)
    orig.pgcode = pgcode
    return IntegrityError("DELETE FROM consultations", {}, orig)


class TestErrorTaxonomy:
    """Test HTTP mapping metadata on each error kind."""

    def test_status_codes(self):
        assert ValidationError("x").status_code == 400
        assert NotFoundError("x").status_code == 404
        assert ReferentialConflictError("x").status_code == 409
        assert StorageError("x").status_code == 503

    def test_message_is_kept(self):
        assert NotFoundError("Consultation 3 not found").message == "Consultation 3 not found"


class TestClassifyStorageError:
    """Test translation of SQLAlchemy errors."""

    def test_sqlite_foreign_key_message(self):
        error = _integrity_error("FOREIGN KEY constraint failed")

        assert is_foreign_key_violation(error)
        assert isinstance(classify_storage_error(error, "delete consultation 1"), ReferentialConflictError)

    def test_postgres_sqlstate(self):
        error = _integrity_error("update or delete violates constraint", pgcode="23503")

        assert is_foreign_key_violation(error)

    def test_unique_violation_is_storage_error(self):
        error = _integrity_error("UNIQUE constraint failed: patients.national_id", pgcode="23505")

        classified = classify_storage_error(error, "create patient")

        assert isinstance(classified, StorageError)
        assert "create patient" in classified.message

    def test_operational_error_is_storage_error(self):
        error = OperationalError("SELECT 1", {}, Exception("server closed the connection"))

        assert not is_foreign_key_violation(error)
        assert isinstance(classify_storage_error(error, "list patients"), StorageError)

    def test_conflict_message_names_the_action(self):
        error = _integrity_error("FOREIGN KEY constraint failed")

        classified = classify_storage_error(error, "delete professional 7")

        assert classified.message == "Cannot delete professional 7: related records exist"
