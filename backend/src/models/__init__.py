# Package initialization
# Import all models to ensure relationships are properly established
from .patient import Patient
from .professional import Professional
from .consultation import Consultation
from .consultation_professional import ConsultationProfessional

__all__ = [
    "Patient",
    "Professional",
    "Consultation",
    "ConsultationProfessional",
]
