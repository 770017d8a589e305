"""
Consultation-Professional mapping model.

This model establishes the many-to-many relationship between consultations
and the professionals who take part in them.
"""

from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class ConsultationProfessional(Base):
    """
    Many-to-many mapping between consultations and professionals.

    The composite primary key makes each (consultation, professional) pair
    unique at the storage layer. Neither foreign key cascades: join rows are
    cleared explicitly before a consultation is deleted, and deleting a
    professional that is still linked is a referential conflict.
    """

    __tablename__ = "consultation_professionals"

    consultation_id: Mapped[int] = mapped_column(ForeignKey("consultations.id"), primary_key=True)
    """Reference to the consultation."""

    professional_id: Mapped[int] = mapped_column(ForeignKey("professionals.id"), primary_key=True)
    """Reference to the professional taking part in the consultation."""

    __table_args__ = (
        Index('idx_consultation_professionals_professional', 'professional_id'),
    )
