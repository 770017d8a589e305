"""
Consultation service for consultation business logic.

Validates consultation fields, resolves professional identifiers into
records, and delegates persistence to ConsultationRepository.
"""

import logging
from datetime import date as date_type
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from core.constants import MAX_CONSULTATION_KIND_LENGTH, MAX_STRING_LENGTH
from core.exceptions import NotFoundError, ValidationError
from repositories import ConsultationRepository, ProfessionalRepository
from shared_types import ConsultationData, ProfessionalData
from utils.record_validators import ensure_valid, validate_consultation_date, validate_required_text

logger = logging.getLogger(__name__)

# Reason is stored as TEXT; this only guards against runaway payloads
MAX_REASON_LENGTH = MAX_STRING_LENGTH * 8


class ConsultationService:
    """
    Service class for consultation operations.

    Contains business logic for consultation management shared by the API
    endpoints and scripts.
    """

    @staticmethod
    def list_consultations(db: Session) -> List[ConsultationData]:
        """List all consultations, most recent first."""
        return ConsultationRepository.list_all(db)

    @staticmethod
    def get_consultation(db: Session, consultation_id: int) -> ConsultationData:
        """
        Get a consultation with its professionals.

        Raises:
            NotFoundError: If the consultation does not exist
        """
        consultation = ConsultationRepository.read(db, consultation_id)
        if consultation is None:
            raise NotFoundError(f"Consultation {consultation_id} not found")
        return consultation

    @staticmethod
    def create_consultation(
        db: Session,
        kind: str,
        date: Union[str, date_type],
        reason: str,
        professional_ids: Optional[List[int]] = None
    ) -> ConsultationData:
        """
        Create a consultation linked to the given professionals.

        Args:
            db: Database session
            kind: Consultation kind (e.g. "retorno")
            date: Consultation date, as a date or YYYY-MM-DD string
            reason: Reason for the consultation
            professional_ids: IDs of participating professionals (may be empty)

        Returns:
            Created consultation with its assigned id

        Raises:
            ValidationError: If a field is invalid or a professional does not exist
        """
        consultation = ConsultationData(
            kind=ensure_valid(validate_required_text, kind, 'Kind', MAX_CONSULTATION_KIND_LENGTH),
            date=ensure_valid(validate_consultation_date, date),
            reason=ensure_valid(validate_required_text, reason, 'Reason', MAX_REASON_LENGTH),
            professionals=ConsultationService._resolve_professionals(db, professional_ids or []),
        )
        return ConsultationRepository.create(db, consultation)

    @staticmethod
    def update_consultation(
        db: Session,
        consultation_id: int,
        kind: Optional[str] = None,
        date: Optional[Union[str, date_type]] = None,
        reason: Optional[str] = None,
        professional_ids: Optional[List[int]] = None
    ) -> ConsultationData:
        """
        Partially update a consultation.

        Only the provided fields change. When ``professional_ids`` is given
        (even as an empty list) it fully replaces the linked professionals;
        when omitted the current links are kept.

        Raises:
            NotFoundError: If the consultation does not exist
            ValidationError: If a field is invalid or a professional does not exist
        """
        consultation = ConsultationService.get_consultation(db, consultation_id)

        if kind is not None:
            consultation.kind = ensure_valid(
                validate_required_text, kind, 'Kind', MAX_CONSULTATION_KIND_LENGTH
            )
        if date is not None:
            consultation.date = ensure_valid(validate_consultation_date, date)
        if reason is not None:
            consultation.reason = ensure_valid(validate_required_text, reason, 'Reason', MAX_REASON_LENGTH)
        if professional_ids is not None:
            consultation.professionals = ConsultationService._resolve_professionals(db, professional_ids)

        return ConsultationRepository.update(db, consultation)

    @staticmethod
    def delete_consultation(db: Session, consultation_id: int) -> None:
        """
        Delete a consultation.

        Raises:
            NotFoundError: If the consultation does not exist
            ReferentialConflictError: If other records still reference it
        """
        ConsultationRepository.delete(db, consultation_id)

    @staticmethod
    def _resolve_professionals(db: Session, professional_ids: List[int]) -> List[ProfessionalData]:
        professionals: List[ProfessionalData] = []
        missing: List[int] = []
        for professional_id in dict.fromkeys(professional_ids):
            professional = ProfessionalRepository.read(db, professional_id)
            if professional is None:
                missing.append(professional_id)
            else:
                professionals.append(professional)
        if missing:
            logger.warning(f"Unknown professional IDs in consultation request: {missing}")
            raise ValidationError(f"Professionals not found: {', '.join(str(i) for i in missing)}")
        return professionals
