"""
Professional service for shared professional business logic.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.constants import MAX_PROFESSIONAL_NAME_LENGTH, MAX_SERVICE_MODE_LENGTH, MAX_SPECIALTY_LENGTH
from core.exceptions import NotFoundError, ValidationError
from repositories import ProfessionalRepository
from shared_types import ProfessionalData
from utils.record_validators import (
    ensure_valid,
    validate_license_number,
    validate_person_name,
    validate_required_text,
)

logger = logging.getLogger(__name__)


class ProfessionalService:
    """Service class for professional operations."""

    @staticmethod
    def list_professionals(db: Session) -> List[ProfessionalData]:
        return ProfessionalRepository.list_all(db)

    @staticmethod
    def get_professional(db: Session, professional_id: int) -> ProfessionalData:
        """
        Get a professional by ID.

        Raises:
            NotFoundError: If the professional does not exist
        """
        professional = ProfessionalRepository.read(db, professional_id)
        if professional is None:
            raise NotFoundError(f"Professional {professional_id} not found")
        return professional

    @staticmethod
    def find_by_license_number(db: Session, license_number: int) -> ProfessionalData:
        """
        Get the professional holding a license number.

        Raises:
            ValidationError: If the license number is not positive
            NotFoundError: If no professional holds it
        """
        professional = ProfessionalRepository.find_by_license_number(db, license_number)
        if professional is None:
            raise NotFoundError(f"No professional with license number {license_number}")
        return professional

    @staticmethod
    def create_professional(
        db: Session,
        name: str,
        specialty: str,
        service_mode: str,
        license_number: int
    ) -> ProfessionalData:
        """
        Create a new professional.

        Raises:
            ValidationError: If a field is invalid or the license number is already registered
        """
        professional = ProfessionalData(
            name=ensure_valid(validate_person_name, name, MAX_PROFESSIONAL_NAME_LENGTH),
            specialty=ensure_valid(validate_required_text, specialty, 'Specialty', MAX_SPECIALTY_LENGTH),
            service_mode=ensure_valid(validate_required_text, service_mode, 'Service mode', MAX_SERVICE_MODE_LENGTH),
            license_number=ensure_valid(validate_license_number, license_number),
        )
        ProfessionalService._ensure_license_number_available(db, professional.license_number)
        return ProfessionalRepository.create(db, professional)

    @staticmethod
    def update_professional(
        db: Session,
        professional_id: int,
        name: Optional[str] = None,
        specialty: Optional[str] = None,
        service_mode: Optional[str] = None,
        license_number: Optional[int] = None
    ) -> ProfessionalData:
        """
        Partially update a professional; only provided fields change.

        Raises:
            NotFoundError: If the professional does not exist
            ValidationError: If a field is invalid or the new license number belongs to someone else
        """
        professional = ProfessionalService.get_professional(db, professional_id)

        if name is not None:
            professional.name = ensure_valid(validate_person_name, name, MAX_PROFESSIONAL_NAME_LENGTH)
        if specialty is not None:
            professional.specialty = ensure_valid(
                validate_required_text, specialty, 'Specialty', MAX_SPECIALTY_LENGTH
            )
        if service_mode is not None:
            professional.service_mode = ensure_valid(
                validate_required_text, service_mode, 'Service mode', MAX_SERVICE_MODE_LENGTH
            )
        if license_number is not None and license_number != professional.license_number:
            license_number = ensure_valid(validate_license_number, license_number)
            ProfessionalService._ensure_license_number_available(db, license_number)
            professional.license_number = license_number

        return ProfessionalRepository.update(db, professional)

    @staticmethod
    def delete_professional(db: Session, professional_id: int) -> None:
        """
        Delete a professional.

        Raises:
            NotFoundError: If the professional does not exist
            ReferentialConflictError: If the professional is still linked to a consultation
        """
        ProfessionalRepository.delete(db, professional_id)

    @staticmethod
    def _ensure_license_number_available(db: Session, license_number: int) -> None:
        if ProfessionalRepository.find_by_license_number(db, license_number) is not None:
            logger.info(f"Rejected duplicate license number {license_number}")
            raise ValidationError(f"License number {license_number} is already registered")
