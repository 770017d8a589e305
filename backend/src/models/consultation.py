"""
Consultation model representing a scheduled or recorded clinical encounter.

A consultation is linked to zero or more professionals through the
``consultation_professionals`` join table. The join rows are managed
explicitly by ``repositories.association_store`` rather than through an
ORM collection, so every change to them goes through one place.
"""

from datetime import date as date_type

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class Consultation(Base):
    """
    Consultation entity.

    The primary key is assigned by the application (sequential ``max + 1``)
    and never reused while the row exists.
    """

    __tablename__ = "consultations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    """Unique identifier for the consultation."""

    kind: Mapped[str] = mapped_column(String(100))
    """Free-text category (e.g. "Consulta Geral", "Retorno", "Exame")."""

    date: Mapped[date_type] = mapped_column(Date, index=True)
    """Calendar date of the consultation (no time component)."""

    reason: Mapped[str] = mapped_column(Text)
    """Free-text reason for the consultation."""
