"""
Database Integration Tests.

Tests the storage-level constraints the repositories rely on.
"""

from datetime import date

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from models import Consultation, ConsultationProfessional, Patient
from tests.conftest import create_patient, create_professional


@pytest.fixture
def consultation(db_session):
    row = Consultation(id=1, kind="retorno", date=date(2024, 3, 15), reason="Dor lombar")
    db_session.add(row)
    db_session.commit()
    return row


class TestSchema:
    """Test table layout."""

    def test_tables_exist(self, db_engine):
        tables = set(inspect(db_engine).get_table_names())

        assert {"patients", "professionals", "consultations", "consultation_professionals"} <= tables

    def test_join_table_has_composite_primary_key(self, db_engine):
        pk = inspect(db_engine).get_pk_constraint("consultation_professionals")

        assert set(pk["constrained_columns"]) == {"consultation_id", "professional_id"}


class TestConstraints:
    """Test constraints enforced by the storage engine."""

    def test_duplicate_pair_rejected(self, db_session, consultation):
        create_professional(db_session, 10)
        db_session.add(ConsultationProfessional(consultation_id=1, professional_id=10))
        db_session.commit()
        db_session.expunge_all()

        db_session.add(ConsultationProfessional(consultation_id=1, professional_id=10))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_link_to_missing_consultation_rejected(self, db_session):
        create_professional(db_session, 10)

        db_session.add(ConsultationProfessional(consultation_id=404, professional_id=10))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_link_to_missing_professional_rejected(self, db_session, consultation):
        db_session.add(ConsultationProfessional(consultation_id=1, professional_id=404))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_national_id_unique(self, db_session):
        create_patient(db_session, 1, national_id="12345678901")

        db_session.add(Patient(
            id=2, name="Outra", age=30, technical_level=2, service_mode="remoto",
            national_id="12345678901", password_hash="x"
        ))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
