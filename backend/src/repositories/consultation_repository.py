"""
Consultation persistence and professional-link orchestration.

Each write runs as a single transaction on the caller's session:

- create: allocate id + insert row + link every professional
- update: overwrite row + unlink all + relink every professional
- delete: unlink all + delete row

The transaction is committed once at the end and rolled back on any
failure, so a consultation is never left with a half-written set of
professionals, and readers never observe the transient empty set between
unlink and relink.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, RecordsError, ValidationError, classify_storage_error
from models import Consultation
from repositories.association_store import AssociationStore
from repositories.identifier_allocator import EntityKind, allocator_for, insert_with_fresh_id
from shared_types import ConsultationData, ProfessionalData

logger = logging.getLogger(__name__)


def _distinct_professional_ids(professionals: Iterable[ProfessionalData]) -> List[int]:
    """Professional ids in first-seen order, without repeats."""
    seen: set[int] = set()
    ids: List[int] = []
    for professional in professionals or []:
        if not professional.has_id:
            raise ValidationError("Cannot link a professional without an ID")
        if professional.id not in seen:
            seen.add(professional.id)
            ids.append(professional.id)
    return ids


class ConsultationRepository:
    """
    CRUD for consultations, keeping each consultation's linked
    professionals equal to the list most recently written.
    """

    @staticmethod
    def create(db: Session, consultation: ConsultationData) -> ConsultationData:
        """
        Insert a consultation and link its professionals.

        Args:
            db: Database session
            consultation: Consultation to store; its id is ignored and replaced

        Returns:
            The same consultation with its assigned id

        Raises:
            ValidationError: If a professional is unknown or has no id
            StorageError: If the storage engine fails; nothing is stored
        """
        professional_ids = _distinct_professional_ids(consultation.professionals)

        def build_row(candidate_id: int) -> Consultation:
            return Consultation(
                id=candidate_id,
                kind=consultation.kind,
                date=consultation.date,
                reason=consultation.reason,
            )

        row = insert_with_fresh_id(
            db, allocator_for(EntityKind.CONSULTATION), build_row, "create consultation"
        )
        try:
            for professional_id in professional_ids:
                AssociationStore.link(db, row.id, professional_id)
            db.commit()
        except RecordsError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, "create consultation") from e

        consultation.id = row.id
        logger.info(f"Created consultation {row.id} with {len(professional_ids)} professional(s)")
        return consultation

    @staticmethod
    def read(db: Session, consultation_id: int) -> Optional[ConsultationData]:
        """
        Fetch a consultation with its professionals.

        Returns:
            The consultation, or None if the id has no row. An existing
            consultation with no professionals comes back with an empty list.
        """
        try:
            row = db.query(Consultation).filter(Consultation.id == consultation_id).first()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, f"read consultation {consultation_id}") from e

        if row is None:
            logger.debug(f"Consultation {consultation_id} not found")
            return None
        return ConsultationRepository._hydrate(db, row)

    @staticmethod
    def list_all(db: Session) -> List[ConsultationData]:
        """All consultations, most recent date first, with their professionals."""
        try:
            rows = db.query(Consultation).order_by(
                Consultation.date.desc(), Consultation.id.desc()
            ).all()
        except SQLAlchemyError as e:
            raise classify_storage_error(e, "list consultations") from e
        logger.debug(f"Listed {len(rows)} consultations")
        return [ConsultationRepository._hydrate(db, row) for row in rows]

    @staticmethod
    def update(db: Session, consultation: ConsultationData) -> ConsultationData:
        """
        Overwrite kind/date/reason and replace the linked professionals.

        The professional set is fully replaced, not merged: professionals
        missing from ``consultation.professionals`` are unlinked.

        Raises:
            ValidationError: If the consultation has no valid id, or a professional is unknown
            NotFoundError: If no row has that id
            StorageError: If the storage engine fails; nothing is changed
        """
        if consultation.id is None or consultation.id <= 0:
            raise ValidationError("Invalid consultation ID for update")
        professional_ids = _distinct_professional_ids(consultation.professionals)

        try:
            updated = db.query(Consultation).filter(
                Consultation.id == consultation.id
            ).update({
                "kind": consultation.kind,
                "date": consultation.date,
                "reason": consultation.reason,
            }, synchronize_session="fetch")
            if not updated:
                raise NotFoundError(f"Consultation {consultation.id} not found")

            AssociationStore.unlink_all(db, consultation.id)
            for professional_id in professional_ids:
                AssociationStore.link(db, consultation.id, professional_id)
            db.commit()
        except RecordsError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, f"update consultation {consultation.id}") from e

        logger.info(f"Updated consultation {consultation.id} with {len(professional_ids)} professional(s)")
        return consultation

    @staticmethod
    def delete(db: Session, consultation_id: int) -> None:
        """
        Delete a consultation after clearing its professional links.

        Raises:
            NotFoundError: If no row has that id
            ReferentialConflictError: If other rows still reference the consultation
            StorageError: If the storage engine fails; nothing is deleted
        """
        try:
            AssociationStore.unlink_all(db, consultation_id)
            deleted = db.query(Consultation).filter(
                Consultation.id == consultation_id
            ).delete(synchronize_session="fetch")
            if not deleted:
                raise NotFoundError(f"Consultation {consultation_id} not found")
            db.commit()
        except RecordsError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            raise classify_storage_error(e, f"delete consultation {consultation_id}") from e

        logger.info(f"Deleted consultation {consultation_id}")

    @staticmethod
    def _hydrate(db: Session, row: Consultation) -> ConsultationData:
        return ConsultationData(
            id=row.id,
            kind=row.kind,
            date=row.date,
            reason=row.reason,
            professionals=AssociationStore.professionals_for(db, row.id),
        )
