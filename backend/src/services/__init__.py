"""
Services package for shared business logic.

This package contains service classes that encapsulate business logic
shared across multiple API endpoints.
"""

from .password_service import PasswordService
from .jwt_service import JWTService
from .patient_service import PatientService
from .professional_service import ProfessionalService
from .consultation_service import ConsultationService

__all__ = [
    "PasswordService",
    "JWTService",
    "PatientService",
    "ProfessionalService",
    "ConsultationService",
]
