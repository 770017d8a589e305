"""
Patient model representing individuals who are seen at the clinic.

Patients log in with their national identifier (CPF) and a password, so the
national identifier is unique and the password is only ever stored as a
bcrypt digest.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class Patient(Base):
    """
    Patient entity.

    The primary key is assigned by the application (sequential ``max + 1``),
    never by the database.
    """

    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    """Unique identifier for the patient."""

    name: Mapped[str] = mapped_column(String(50))
    """Full name of the patient."""

    age: Mapped[int] = mapped_column(Integer)
    """Age in years (0-120)."""

    technical_level: Mapped[int] = mapped_column(Integer)
    """Self-reported technical literacy level (0-10), used to tailor remote service."""

    service_mode: Mapped[str] = mapped_column(String(30))
    """How the patient is attended (e.g. "presencial", "remoto")."""

    national_id: Mapped[str] = mapped_column(String(11), unique=True, index=True)
    """National identifier number (CPF), exactly 11 digits."""

    password_hash: Mapped[str] = mapped_column(String(255))
    """bcrypt digest of the patient's password."""
