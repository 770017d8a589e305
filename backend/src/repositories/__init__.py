"""
Repositories package for record persistence.

Repositories translate between the record dataclasses in ``shared_types``
and the ORM models, own transaction boundaries, and translate storage
failures into the error taxonomy of ``core.exceptions``.
"""

from .identifier_allocator import EntityKind, next_id
from .association_store import AssociationStore
from .consultation_repository import ConsultationRepository
from .patient_repository import PatientRepository
from .professional_repository import ProfessionalRepository

__all__ = [
    "EntityKind",
    "next_id",
    "AssociationStore",
    "ConsultationRepository",
    "PatientRepository",
    "ProfessionalRepository",
]
