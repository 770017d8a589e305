"""
Shared response models for API endpoints.

This module contains Pydantic response models that are shared across
multiple API endpoints to ensure consistency and reduce duplication.
"""

from datetime import date as date_type
from typing import List

from pydantic import BaseModel

from shared_types import ConsultationData, PatientData, ProfessionalData


class ProfessionalResponse(BaseModel):
    """Response model for professional information."""
    id: int
    name: str
    specialty: str
    service_mode: str
    license_number: int

    @classmethod
    def from_record(cls, professional: ProfessionalData) -> "ProfessionalResponse":
        return cls(
            id=professional.id,
            name=professional.name,
            specialty=professional.specialty,
            service_mode=professional.service_mode,
            license_number=professional.license_number,
        )


class ProfessionalListResponse(BaseModel):
    """Response model for listing professionals."""
    professionals: List[ProfessionalResponse]


class PatientResponse(BaseModel):
    """Response model for patient information (never includes the password hash)."""
    id: int
    name: str
    age: int
    technical_level: int
    service_mode: str
    national_id: str

    @classmethod
    def from_record(cls, patient: PatientData) -> "PatientResponse":
        return cls(
            id=patient.id,
            name=patient.name,
            age=patient.age,
            technical_level=patient.technical_level,
            service_mode=patient.service_mode,
            national_id=patient.national_id,
        )


class PatientListResponse(BaseModel):
    """Response model for listing patients."""
    patients: List[PatientResponse]


class ConsultationResponse(BaseModel):
    """Response model for a consultation with its professionals."""
    id: int
    kind: str
    date: date_type  # Serialized to YYYY-MM-DD in JSON
    reason: str
    professionals: List[ProfessionalResponse]

    @classmethod
    def from_record(cls, consultation: ConsultationData) -> "ConsultationResponse":
        return cls(
            id=consultation.id,
            kind=consultation.kind,
            date=consultation.date,
            reason=consultation.reason,
            professionals=[ProfessionalResponse.from_record(p) for p in consultation.professionals],
        )


class ConsultationListResponse(BaseModel):
    """Response model for listing consultations."""
    consultations: List[ConsultationResponse]


class LoginResponse(BaseModel):
    """Response model for a successful login."""
    token: str
