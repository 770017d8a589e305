"""
Patient Management API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.orm import Session

from core.constants import MAX_PATIENT_NAME_LENGTH, MAX_SERVICE_MODE_LENGTH
from core.database import get_db
from services import PatientService
from utils.id_utils import require_positive_id
from utils.record_validators import (
    validate_age,
    validate_national_id,
    validate_password,
    validate_person_name,
    validate_required_text,
    validate_technical_level,
)
from api.responses import PatientListResponse, PatientResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class PatientCreateRequest(BaseModel):
    """Request model for registering a patient."""
    name: str
    age: int
    technical_level: int
    service_mode: str
    national_id: str
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_person_name(v, MAX_PATIENT_NAME_LENGTH)

    @field_validator('age')
    @classmethod
    def validate_age(cls, v: int) -> int:
        return validate_age(v)

    @field_validator('technical_level')
    @classmethod
    def validate_technical_level(cls, v: int) -> int:
        return validate_technical_level(v)

    @field_validator('service_mode')
    @classmethod
    def validate_service_mode(cls, v: str) -> str:
        return validate_required_text(v, 'Service mode', MAX_SERVICE_MODE_LENGTH)

    @field_validator('national_id')
    @classmethod
    def validate_national_id(cls, v: str) -> str:
        """Accepts formatted CPF (e.g. 123.456.789-01) and keeps digits only."""
        return validate_national_id(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password(v)


class PatientUpdateRequest(BaseModel):
    """Request model for updating a patient; omitted fields are left unchanged."""
    name: Optional[str] = None
    age: Optional[int] = None
    technical_level: Optional[int] = None
    service_mode: Optional[str] = None
    national_id: Optional[str] = None
    password: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_person_name(v, MAX_PATIENT_NAME_LENGTH)

    @field_validator('age')
    @classmethod
    def validate_age(cls, v: Optional[int]) -> Optional[int]:
        return None if v is None else validate_age(v)

    @field_validator('technical_level')
    @classmethod
    def validate_technical_level(cls, v: Optional[int]) -> Optional[int]:
        return None if v is None else validate_technical_level(v)

    @field_validator('service_mode')
    @classmethod
    def validate_service_mode(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_required_text(v, 'Service mode', MAX_SERVICE_MODE_LENGTH)

    @field_validator('national_id')
    @classmethod
    def validate_national_id(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_national_id(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_password(v)

    @model_validator(mode='after')
    def validate_at_least_one_field(self):
        """Ensure at least one field is provided for update."""
        if not self.model_dump(exclude_none=True):
            raise ValueError('At least one field must be provided for update')
        return self


@router.get("", summary="List all patients", response_model=PatientListResponse)
async def list_patients(db: Session = Depends(get_db)) -> PatientListResponse:
    """Get all patients ordered by name."""
    patients = PatientService.list_patients(db)
    return PatientListResponse(patients=[PatientResponse.from_record(p) for p in patients])


@router.get("/national-id/{national_id}", summary="Find patient by national ID",
            response_model=PatientResponse)
async def get_patient_by_national_id(
    national_id: str,
    db: Session = Depends(get_db)
) -> PatientResponse:
    """Look up a patient by national ID (CPF); 400 if it is not 11 digits."""
    patient = PatientService.find_by_national_id(db, national_id)
    return PatientResponse.from_record(patient)


@router.get("/{patient_id}", summary="Get patient", response_model=PatientResponse)
async def get_patient(
    patient_id: int,
    db: Session = Depends(get_db)
) -> PatientResponse:
    require_positive_id(patient_id, "patient ID")
    patient = PatientService.get_patient(db, patient_id)
    return PatientResponse.from_record(patient)


@router.post("", summary="Register patient", response_model=PatientResponse,
             status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: PatientCreateRequest,
    response: Response,
    db: Session = Depends(get_db)
) -> PatientResponse:
    """
    Register a new patient.

    The password is stored as a bcrypt hash. A national ID that is already
    registered is rejected with 400.
    """
    patient = PatientService.create_patient(
        db,
        name=request.name,
        age=request.age,
        technical_level=request.technical_level,
        service_mode=request.service_mode,
        national_id=request.national_id,
        password=request.password
    )
    response.headers["Location"] = f"/api/patients/{patient.id}"
    logger.info(f"Patient {patient.id} registered via API")
    return PatientResponse.from_record(patient)


@router.put("/{patient_id}", summary="Update patient", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    request: PatientUpdateRequest,
    db: Session = Depends(get_db)
) -> PatientResponse:
    require_positive_id(patient_id, "patient ID")
    patient = PatientService.update_patient(
        db,
        patient_id,
        name=request.name,
        age=request.age,
        technical_level=request.technical_level,
        service_mode=request.service_mode,
        national_id=request.national_id,
        password=request.password
    )
    return PatientResponse.from_record(patient)


@router.delete("/{patient_id}", summary="Delete patient",
               status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: int,
    db: Session = Depends(get_db)
) -> Response:
    require_positive_id(patient_id, "patient ID")
    PatientService.delete_patient(db, patient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
