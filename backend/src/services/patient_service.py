"""
Patient service for shared patient business logic.

This module contains patient-related business logic shared between the
patient endpoints and login: field validation, duplicate national ID
checks, password hashing and credential checks.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.constants import MAX_PATIENT_NAME_LENGTH, MAX_SERVICE_MODE_LENGTH
from core.exceptions import NotFoundError, ValidationError
from repositories import PatientRepository
from services.password_service import PasswordService
from shared_types import PatientData
from utils.record_validators import (
    ensure_valid,
    validate_age,
    validate_national_id,
    validate_password,
    validate_person_name,
    validate_required_text,
    validate_technical_level,
)

logger = logging.getLogger(__name__)


class PatientService:
    """
    Service class for patient operations.

    Contains business logic for patient management that is shared
    across different API endpoints.
    """

    @staticmethod
    def list_patients(db: Session) -> List[PatientData]:
        """List all patients ordered by name."""
        return PatientRepository.list_all(db)

    @staticmethod
    def get_patient(db: Session, patient_id: int) -> PatientData:
        """
        Get a patient by ID.

        Raises:
            NotFoundError: If the patient does not exist
        """
        patient = PatientRepository.read(db, patient_id)
        if patient is None:
            raise NotFoundError(f"Patient {patient_id} not found")
        return patient

    @staticmethod
    def find_by_national_id(db: Session, national_id: str) -> PatientData:
        """
        Get the patient holding a national ID.

        Raises:
            ValidationError: If the national ID is malformed
            NotFoundError: If no patient holds it
        """
        cleaned = ensure_valid(validate_national_id, national_id)
        patient = PatientRepository.find_by_national_id(db, cleaned)
        if patient is None:
            raise NotFoundError("No patient with that national ID")
        return patient

    @staticmethod
    def create_patient(
        db: Session,
        name: str,
        age: int,
        technical_level: int,
        service_mode: str,
        national_id: str,
        password: str
    ) -> PatientData:
        """
        Create a new patient record.

        Args:
            db: Database session
            name: Patient's full name
            age: Age in years
            technical_level: Technical literacy level (0-10)
            service_mode: How the patient is attended
            national_id: National ID (CPF), formatted or digits only
            password: Plaintext password; only its hash is stored

        Returns:
            Created patient with its assigned id

        Raises:
            ValidationError: If a field is invalid or the national ID is already registered
        """
        patient = PatientData(
            name=ensure_valid(validate_person_name, name, MAX_PATIENT_NAME_LENGTH),
            age=ensure_valid(validate_age, age),
            technical_level=ensure_valid(validate_technical_level, technical_level),
            service_mode=ensure_valid(validate_required_text, service_mode, 'Service mode', MAX_SERVICE_MODE_LENGTH),
            national_id=ensure_valid(validate_national_id, national_id),
            password_hash=PasswordService.hash_password(ensure_valid(validate_password, password)),
        )
        PatientService._ensure_national_id_available(db, patient.national_id)
        return PatientRepository.create(db, patient)

    @staticmethod
    def update_patient(
        db: Session,
        patient_id: int,
        name: Optional[str] = None,
        age: Optional[int] = None,
        technical_level: Optional[int] = None,
        service_mode: Optional[str] = None,
        national_id: Optional[str] = None,
        password: Optional[str] = None
    ) -> PatientData:
        """
        Partially update a patient; only provided fields change.

        A new password is re-hashed before storage.

        Raises:
            NotFoundError: If the patient does not exist
            ValidationError: If a field is invalid or the new national ID belongs to someone else
        """
        patient = PatientService.get_patient(db, patient_id)

        if name is not None:
            patient.name = ensure_valid(validate_person_name, name, MAX_PATIENT_NAME_LENGTH)
        if age is not None:
            patient.age = ensure_valid(validate_age, age)
        if technical_level is not None:
            patient.technical_level = ensure_valid(validate_technical_level, technical_level)
        if service_mode is not None:
            patient.service_mode = ensure_valid(
                validate_required_text, service_mode, 'Service mode', MAX_SERVICE_MODE_LENGTH
            )
        if national_id is not None:
            cleaned = ensure_valid(validate_national_id, national_id)
            if cleaned != patient.national_id:
                PatientService._ensure_national_id_available(db, cleaned)
                patient.national_id = cleaned
        if password is not None:
            patient.password_hash = PasswordService.hash_password(ensure_valid(validate_password, password))

        return PatientRepository.update(db, patient)

    @staticmethod
    def delete_patient(db: Session, patient_id: int) -> None:
        """
        Delete a patient.

        Raises:
            NotFoundError: If the patient does not exist
        """
        PatientRepository.delete(db, patient_id)

    @staticmethod
    def authenticate(db: Session, national_id: str, password: str) -> Optional[PatientData]:
        """
        Check a patient's login credentials.

        Returns:
            The patient if the national ID exists and the password matches, else None
        """
        try:
            cleaned = validate_national_id(national_id)
        except ValueError:
            return None
        patient = PatientRepository.find_by_national_id(db, cleaned)
        if patient is None or not PasswordService.verify_password(password, patient.password_hash):
            logger.info("Rejected login attempt")
            return None
        return patient

    @staticmethod
    def _ensure_national_id_available(db: Session, national_id: str) -> None:
        if PatientRepository.find_by_national_id(db, national_id) is not None:
            raise ValidationError("National ID is already registered")
