"""
Professional persistence.

Professionals get random-sparse identifiers and have no relational fan-out
of their own; deleting one that is still linked to a consultation is
refused by the storage engine and surfaced as a referential conflict.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import LICENSE_NUMBER_MODULUS
from core.exceptions import NotFoundError, ValidationError, classify_storage_error
from models import Professional
from repositories.identifier_allocator import EntityKind, allocator_for, insert_with_fresh_id
from shared_types import ProfessionalData

logger = logging.getLogger(__name__)


def to_professional_data(row: Professional) -> ProfessionalData:
    return ProfessionalData(
        id=row.id,
        name=row.name,
        specialty=row.specialty,
        service_mode=row.service_mode,
        license_number=row.license_number,
    )


def normalize_license_number(license_number: int, modulus: int = LICENSE_NUMBER_MODULUS) -> int:
    """
    Reduce a license number modulo ``modulus`` before it is stored.

    This is lossy for numbers at or above the modulus; a warning is logged
    whenever the stored value differs from the submitted one. A modulus of 0
    stores the number unchanged.
    """
    if modulus <= 0:
        return license_number
    normalized = license_number % modulus
    if normalized != license_number:
        logger.warning(f"License number {license_number} stored as {normalized} (modulo {modulus})")
    return normalized


class ProfessionalRepository:
    """CRUD for professionals."""

    @staticmethod
    def create(db: Session, professional: ProfessionalData) -> ProfessionalData:
        """
        Insert a professional under a freshly drawn random identifier.

        The input is updated in place with the assigned id and the stored
        license number, and returned.
        """
        license_number = normalize_license_number(professional.license_number)

        def build_row(candidate_id: int) -> Professional:
            return Professional(
                id=candidate_id,
                name=professional.name,
                specialty=professional.specialty,
                service_mode=professional.service_mode,
                license_number=license_number,
            )

        row = insert_with_fresh_id(
            db, allocator_for(EntityKind.PROFESSIONAL), build_row, "create professional"
        )
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, "create professional") from e

        professional.id = row.id
        professional.license_number = row.license_number
        logger.info(f"Created professional {row.id}")
        return professional

    @staticmethod
    def read(db: Session, professional_id: int) -> Optional[ProfessionalData]:
        """Fetch a professional, or None if the id has no row."""
        try:
            row = db.query(Professional).filter(Professional.id == professional_id).first()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"read professional {professional_id}") from e
        return to_professional_data(row) if row else None

    @staticmethod
    def find_by_license_number(db: Session, license_number: int) -> Optional[ProfessionalData]:
        """
        Fetch the professional holding a license number.

        Raises:
            ValidationError: If the license number is not positive
        """
        if license_number is None or license_number <= 0:
            raise ValidationError("License number must be a positive number")
        try:
            row = db.query(Professional).filter(
                Professional.license_number == license_number
            ).order_by(Professional.id).first()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"find professional by license number {license_number}") from e
        return to_professional_data(row) if row else None

    @staticmethod
    def list_all(db: Session) -> List[ProfessionalData]:
        """All professionals ordered by name."""
        try:
            rows = db.query(Professional).order_by(Professional.name, Professional.id).all()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, "list professionals") from e
        logger.debug(f"Listed {len(rows)} professionals")
        return [to_professional_data(r) for r in rows]

    @staticmethod
    def update(db: Session, professional: ProfessionalData) -> ProfessionalData:
        """
        Overwrite the mutable fields of an existing professional.

        Raises:
            ValidationError: If the professional has no valid id
            NotFoundError: If no row has that id
        """
        if professional.id is None or professional.id <= 0:
            raise ValidationError("Invalid professional ID for update")
        try:
            updated = db.query(Professional).filter(
                Professional.id == professional.id
            ).update({
                "name": professional.name,
                "specialty": professional.specialty,
                "service_mode": professional.service_mode,
                "license_number": professional.license_number,
            }, synchronize_session="fetch")
            if not updated:
                db.rollback()
                raise NotFoundError(f"Professional {professional.id} not found")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, f"update professional {professional.id}") from e

        logger.info(f"Updated professional {professional.id}")
        return professional

    @staticmethod
    def delete(db: Session, professional_id: int) -> None:
        """
        Delete a professional.

        Raises:
            NotFoundError: If no row has that id
            ReferentialConflictError: If consultations still reference the professional
        """
        try:
            deleted = db.query(Professional).filter(
                Professional.id == professional_id
            ).delete(synchronize_session="fetch")
            if not deleted:
                db.rollback()
                raise NotFoundError(f"Professional {professional_id} not found")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, f"delete professional {professional_id}") from e

        logger.info(f"Deleted professional {professional_id}")
