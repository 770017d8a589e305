"""
Shared type definitions for the clinic records backend.

This module contains dataclasses and types that are used across repositories,
services and API endpoints.
"""

from shared_types.records import ConsultationData, PatientData, ProfessionalData

__all__ = ["ConsultationData", "PatientData", "ProfessionalData"]
