"""
Test configuration and shared fixtures for the Clinic Records test suite.

Uses an in-memory SQLite database with foreign keys enforced by default;
set TEST_DATABASE_URL to run against PostgreSQL instead. Every test gets
freshly created tables, so repositories are free to commit.
"""

import os
from datetime import date
from typing import Generator

# Configure the application database before core.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, build_engine

# Import all models to ensure they're registered with Base before create_all
from models import Consultation, ConsultationProfessional, Patient, Professional  # noqa: F401
from shared_types import ConsultationData, PatientData, ProfessionalData


# Test database URL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture(scope="function")
def db_engine() -> Generator[Engine, None, None]:
    """
    Create a database engine with an empty schema for one test.

    In-memory SQLite needs a single shared connection (StaticPool) so that
    every session, including those used from TestClient worker threads,
    sees the same database.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = build_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = build_engine(TEST_DATABASE_URL)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine) -> sessionmaker:
    """Session factory configured like core.database.SessionLocal."""
    return sessionmaker(
        bind=db_engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """Provide a database session for a test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def sample_professional_data():
    """Sample professional fields for tests."""
    return {
        "name": "Dra. Ana Souza",
        "specialty": "Fisioterapia",
        "service_mode": "presencial",
        "license_number": 12345,
    }


@pytest.fixture
def sample_patient_data():
    """Sample patient fields for tests (password in plaintext)."""
    return {
        "name": "Carlos Lima",
        "age": 67,
        "technical_level": 3,
        "service_mode": "remoto",
        "national_id": "12345678901",
        "password": "senha12",
    }


# Helper functions for creating records directly through the ORM
def create_professional(
    db_session: Session,
    professional_id: int,
    name: str = "Professional",
    specialty: str = "Clínica geral",
    service_mode: str = "presencial",
    license_number: int = 1000,
) -> ProfessionalData:
    """
    Insert a professional row with a fixed id, bypassing random allocation.

    Returns:
        The stored professional as a record
    """
    db_session.add(Professional(
        id=professional_id,
        name=name,
        specialty=specialty,
        service_mode=service_mode,
        license_number=license_number,
    ))
    db_session.commit()
    return ProfessionalData(
        id=professional_id,
        name=name,
        specialty=specialty,
        service_mode=service_mode,
        license_number=license_number,
    )


def create_patient(
    db_session: Session,
    patient_id: int,
    name: str = "Patient",
    national_id: str = "00000000001",
    password_hash: str = "not-a-real-hash",
) -> PatientData:
    """Insert a patient row with a fixed id."""
    db_session.add(Patient(
        id=patient_id,
        name=name,
        age=40,
        technical_level=5,
        service_mode="presencial",
        national_id=national_id,
        password_hash=password_hash,
    ))
    db_session.commit()
    return PatientData(
        id=patient_id,
        name=name,
        age=40,
        technical_level=5,
        service_mode="presencial",
        national_id=national_id,
        password_hash=password_hash,
    )


def new_consultation(*professionals: ProfessionalData, kind: str = "retorno",
                     on: date = date(2024, 3, 15), reason: str = "Dor lombar") -> ConsultationData:
    """Build an unsaved consultation linked to the given professionals."""
    return ConsultationData(kind=kind, date=on, reason=reason, professionals=list(professionals))
