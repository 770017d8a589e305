"""
Consultation-Professional join rows.

The store never commits: every call runs inside the transaction of the
repository operation that uses it, so a failure here rolls back together
with the consultation row it belongs to.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ValidationError, classify_storage_error
from models import ConsultationProfessional, Professional
from repositories.professional_repository import to_professional_data
from shared_types import ProfessionalData

logger = logging.getLogger(__name__)


class AssociationStore:
    """Create, clear and read the professionals linked to a consultation."""

    @staticmethod
    def link(db: Session, consultation_id: int, professional_id: int) -> None:
        """
        Pair a consultation with a professional.

        Linking a pair that already exists is a no-op, so the pair is stored
        at most once (the composite primary key enforces the same at the
        storage layer).

        Args:
            db: Database session
            consultation_id: Consultation ID
            professional_id: Professional ID

        Raises:
            ValidationError: If the professional does not exist
            StorageError: If the insert fails
        """
        try:
            if db.get(Professional, professional_id) is None:
                raise ValidationError(f"Professional {professional_id} does not exist")

            existing = db.get(ConsultationProfessional, (consultation_id, professional_id))
            if existing is not None:
                logger.debug(f"Professional {professional_id} already linked to consultation {consultation_id}")
                return

            db.add(ConsultationProfessional(
                consultation_id=consultation_id,
                professional_id=professional_id
            ))
            db.flush()
        except SQLAlchemyError as e:
            raise classify_storage_error(
                e, f"link professional {professional_id} to consultation {consultation_id}"
            ) from e

    @staticmethod
    def unlink_all(db: Session, consultation_id: int) -> int:
        """
        Remove every professional link of a consultation.

        Returns:
            Number of join rows removed
        """
        try:
            removed = db.query(ConsultationProfessional).filter(
                ConsultationProfessional.consultation_id == consultation_id
            ).delete(synchronize_session="fetch")
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"unlink professionals from consultation {consultation_id}") from e
        return int(removed or 0)

    @staticmethod
    def linked_ids(db: Session, consultation_id: int) -> List[int]:
        """Professional IDs currently linked to a consultation."""
        try:
            rows = db.query(ConsultationProfessional.professional_id).filter(
                ConsultationProfessional.consultation_id == consultation_id
            ).order_by(ConsultationProfessional.professional_id).all()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"read professional links of consultation {consultation_id}") from e
        return [row.professional_id for row in rows]

    @staticmethod
    def professionals_for(db: Session, consultation_id: int) -> List[ProfessionalData]:
        """
        Fully hydrated professionals linked to a consultation.

        Returns:
            Professionals ordered by name (empty list if none are linked)
        """
        try:
            professionals = db.query(Professional).join(
                ConsultationProfessional,
                ConsultationProfessional.professional_id == Professional.id
            ).filter(
                ConsultationProfessional.consultation_id == consultation_id
            ).order_by(Professional.name, Professional.id).all()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"read professionals of consultation {consultation_id}") from e
        return [to_professional_data(p) for p in professionals]
