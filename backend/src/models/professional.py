"""
Professional model representing healthcare providers.

Professionals take part in consultations through the
``consultation_professionals`` join table.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class Professional(Base):
    """
    Healthcare professional entity.

    The primary key is drawn at random from a small fixed range by the
    application (see ``repositories.identifier_allocator``).
    """

    __tablename__ = "professionals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    """Unique identifier for the professional."""

    name: Mapped[str] = mapped_column(String(80))
    """Full name of the professional."""

    specialty: Mapped[str] = mapped_column(String(50))
    """Medical specialty."""

    service_mode: Mapped[str] = mapped_column(String(30))
    """How the professional attends patients (e.g. "presencial", "remoto")."""

    license_number: Mapped[int] = mapped_column(Integer, index=True)
    """Professional license number (CRM). Intended unique, not enforced by the database."""
