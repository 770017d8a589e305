"""
Patient persistence.

Patients get sequential identifiers. The national identifier (CPF) is
unique at the storage layer; duplicate checks with friendlier messages
live in PatientService.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.constants import NATIONAL_ID_LENGTH
from core.exceptions import NotFoundError, ValidationError, classify_storage_error
from models import Patient
from repositories.identifier_allocator import EntityKind, allocator_for, insert_with_fresh_id
from shared_types import PatientData

logger = logging.getLogger(__name__)


def to_patient_data(row: Patient) -> PatientData:
    return PatientData(
        id=row.id,
        name=row.name,
        age=row.age,
        technical_level=row.technical_level,
        service_mode=row.service_mode,
        national_id=row.national_id,
        password_hash=row.password_hash,
    )


class PatientRepository:
    """CRUD for patients."""

    @staticmethod
    def create(db: Session, patient: PatientData) -> PatientData:
        """
        Insert a patient under the next sequential identifier.

        ``patient.password_hash`` must already be a digest.

        Returns:
            The same patient with its assigned id
        """
        def build_row(candidate_id: int) -> Patient:
            return Patient(
                id=candidate_id,
                name=patient.name,
                age=patient.age,
                technical_level=patient.technical_level,
                service_mode=patient.service_mode,
                national_id=patient.national_id,
                password_hash=patient.password_hash,
            )

        row = insert_with_fresh_id(
            db, allocator_for(EntityKind.PATIENT), build_row, "create patient"
        )
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, "create patient") from e

        patient.id = row.id
        logger.info(f"Created patient {row.id}")
        return patient

    @staticmethod
    def read(db: Session, patient_id: int) -> Optional[PatientData]:
        """Fetch a patient, or None if the id has no row."""
        try:
            row = db.query(Patient).filter(Patient.id == patient_id).first()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"read patient {patient_id}") from e
        return to_patient_data(row) if row else None

    @staticmethod
    def find_by_national_id(db: Session, national_id: str) -> Optional[PatientData]:
        """
        Fetch the patient holding a national identifier.

        Raises:
            ValidationError: If the identifier is not exactly 11 digits
        """
        if not national_id or len(national_id) != NATIONAL_ID_LENGTH or not national_id.isdigit():
            raise ValidationError(f"National ID must have exactly {NATIONAL_ID_LENGTH} digits")
        try:
            row = db.query(Patient).filter(Patient.national_id == national_id).first()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, "find patient by national ID") from e
        return to_patient_data(row) if row else None

    @staticmethod
    def list_all(db: Session) -> List[PatientData]:
        """All patients ordered by name."""
        try:
            rows = db.query(Patient).order_by(Patient.name, Patient.id).all()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, "list patients") from e
        logger.debug(f"Listed {len(rows)} patients")
        return [to_patient_data(r) for r in rows]

    @staticmethod
    def update(db: Session, patient: PatientData) -> PatientData:
        """
        Overwrite every stored field of an existing patient.

        Raises:
            ValidationError: If the patient has no valid id
            NotFoundError: If no row has that id
        """
        if patient.id is None or patient.id <= 0:
            raise ValidationError("Invalid patient ID for update")
        try:
            updated = db.query(Patient).filter(Patient.id == patient.id).update({
                "name": patient.name,
                "age": patient.age,
                "technical_level": patient.technical_level,
                "service_mode": patient.service_mode,
                "national_id": patient.national_id,
                "password_hash": patient.password_hash,
            }, synchronize_session="fetch")
            if not updated:
                db.rollback()
                raise NotFoundError(f"Patient {patient.id} not found")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, f"update patient {patient.id}") from e

        logger.info(f"Updated patient {patient.id}")
        return patient

    @staticmethod
    def delete(db: Session, patient_id: int) -> None:
        """
        Delete a patient.

        Raises:
            NotFoundError: If no row has that id
            ReferentialConflictError: If other rows still reference the patient
        """
        try:
            deleted = db.query(Patient).filter(Patient.id == patient_id).delete(
                synchronize_session="fetch"
            )
            if not deleted:
                db.rollback()
                raise NotFoundError(f"Patient {patient_id} not found")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, f"delete patient {patient_id}") from e

        logger.info(f"Deleted patient {patient_id}")
