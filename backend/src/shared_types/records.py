"""
Record value types held by callers of the repositories.

Repositories take and return these dataclasses instead of ORM instances,
so a caller owns the values it builds and nothing is cached between calls.
"""

import re
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import List, Optional


class IdentifiedRecord:
    """
    Identifier-based equality shared by every record type.

    Two records are equal when they are of the same type and carry the same
    assigned identifier. A record whose identifier is unset is only equal to
    itself: "not yet stored" is a distinct state that never compares equal to
    another record, even another unset one.
    """

    id: Optional[int]

    @property
    def has_id(self) -> bool:
        """Whether storage has assigned this record an identifier."""
        return self.id is not None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        if self.id is None or other.id is None:  # type: ignore[attr-defined]
            return False
        return self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash((type(self).__name__, self.id))


@dataclass(eq=False)
class ProfessionalData(IdentifiedRecord):
    """A healthcare professional as seen by callers."""
    name: str
    specialty: str
    service_mode: str
    license_number: int
    id: Optional[int] = None


@dataclass(eq=False)
class PatientData(IdentifiedRecord):
    """
    A patient as seen by callers.

    ``password_hash`` is always a digest, never the plaintext password.
    """
    name: str
    age: int
    technical_level: int
    service_mode: str
    national_id: str
    password_hash: str
    id: Optional[int] = None

    def clean(self) -> None:
        """Trim text fields and strip formatting from the national id."""
        if self.name is not None:
            self.name = self.name.strip()
        if self.service_mode is not None:
            self.service_mode = self.service_mode.strip()
        if self.national_id is not None:
            self.national_id = re.sub(r"\D", "", self.national_id)

    def has_valid_national_id(self) -> bool:
        return self.national_id is not None and re.fullmatch(r"\d{11}", self.national_id) is not None

    def __repr__(self) -> str:
        # Never print the password digest
        return (
            f"PatientData(id={self.id}, name={self.name!r}, age={self.age}, "
            f"technical_level={self.technical_level}, service_mode={self.service_mode!r}, "
            f"national_id={self.national_id!r})"
        )


@dataclass(eq=False)
class ConsultationData(IdentifiedRecord):
    """
    A consultation together with the professionals taking part in it.

    The order of ``professionals`` is kept for display but carries no
    meaning: the repository treats it as a set keyed by professional id.
    """
    kind: str
    date: date_type
    reason: str
    professionals: List[ProfessionalData] = field(default_factory=list)
    id: Optional[int] = None

    def add_professional(self, professional: ProfessionalData) -> None:
        """Attach a professional unless it is already attached."""
        if professional is not None and professional not in self.professionals:
            self.professionals.append(professional)

    def remove_professional(self, professional: ProfessionalData) -> None:
        """Detach a professional if attached."""
        if professional in self.professionals:
            self.professionals.remove(professional)

    @property
    def professional_ids(self) -> List[int]:
        """Identifiers of the attached professionals, in attachment order."""
        return [p.id for p in self.professionals if p.has_id]
