"""
Professional Management API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.orm import Session

from core.constants import MAX_PROFESSIONAL_NAME_LENGTH, MAX_SERVICE_MODE_LENGTH, MAX_SPECIALTY_LENGTH
from core.database import get_db
from services import ProfessionalService
from utils.id_utils import require_positive_id
from utils.record_validators import validate_license_number, validate_person_name, validate_required_text
from api.responses import ProfessionalListResponse, ProfessionalResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class ProfessionalCreateRequest(BaseModel):
    """Request model for registering a professional."""
    name: str
    specialty: str
    service_mode: str
    license_number: int

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_person_name(v, MAX_PROFESSIONAL_NAME_LENGTH)

    @field_validator('specialty')
    @classmethod
    def validate_specialty(cls, v: str) -> str:
        return validate_required_text(v, 'Specialty', MAX_SPECIALTY_LENGTH)

    @field_validator('service_mode')
    @classmethod
    def validate_service_mode(cls, v: str) -> str:
        return validate_required_text(v, 'Service mode', MAX_SERVICE_MODE_LENGTH)

    @field_validator('license_number')
    @classmethod
    def validate_license_number(cls, v: int) -> int:
        return validate_license_number(v)


class ProfessionalUpdateRequest(BaseModel):
    """Request model for updating a professional; omitted fields are left unchanged."""
    name: Optional[str] = None
    specialty: Optional[str] = None
    service_mode: Optional[str] = None
    license_number: Optional[int] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_person_name(v, MAX_PROFESSIONAL_NAME_LENGTH)

    @field_validator('specialty')
    @classmethod
    def validate_specialty(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_required_text(v, 'Specialty', MAX_SPECIALTY_LENGTH)

    @field_validator('service_mode')
    @classmethod
    def validate_service_mode(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_required_text(v, 'Service mode', MAX_SERVICE_MODE_LENGTH)

    @field_validator('license_number')
    @classmethod
    def validate_license_number(cls, v: Optional[int]) -> Optional[int]:
        return None if v is None else validate_license_number(v)

    @model_validator(mode='after')
    def validate_at_least_one_field(self):
        """Ensure at least one field is provided for update."""
        if not self.model_dump(exclude_none=True):
            raise ValueError('At least one field must be provided for update')
        return self


@router.get("", summary="List all professionals", response_model=ProfessionalListResponse)
async def list_professionals(db: Session = Depends(get_db)) -> ProfessionalListResponse:
    professionals = ProfessionalService.list_professionals(db)
    return ProfessionalListResponse(
        professionals=[ProfessionalResponse.from_record(p) for p in professionals]
    )


@router.get("/license/{license_number}", summary="Find professional by license number",
            response_model=ProfessionalResponse)
async def get_professional_by_license_number(
    license_number: int,
    db: Session = Depends(get_db)
) -> ProfessionalResponse:
    """Look up a professional by license number (CRM)."""
    require_positive_id(license_number, "license number")
    professional = ProfessionalService.find_by_license_number(db, license_number)
    return ProfessionalResponse.from_record(professional)


@router.get("/{professional_id}", summary="Get professional", response_model=ProfessionalResponse)
async def get_professional(
    professional_id: int,
    db: Session = Depends(get_db)
) -> ProfessionalResponse:
    require_positive_id(professional_id, "professional ID")
    professional = ProfessionalService.get_professional(db, professional_id)
    return ProfessionalResponse.from_record(professional)


@router.post("", summary="Register professional", response_model=ProfessionalResponse,
             status_code=status.HTTP_201_CREATED)
async def create_professional(
    request: ProfessionalCreateRequest,
    response: Response,
    db: Session = Depends(get_db)
) -> ProfessionalResponse:
    """
    Register a new professional.

    A license number that is already registered is rejected with 400.
    """
    professional = ProfessionalService.create_professional(
        db,
        name=request.name,
        specialty=request.specialty,
        service_mode=request.service_mode,
        license_number=request.license_number
    )
    response.headers["Location"] = f"/api/professionals/{professional.id}"
    logger.info(f"Professional {professional.id} registered via API")
    return ProfessionalResponse.from_record(professional)


@router.put("/{professional_id}", summary="Update professional", response_model=ProfessionalResponse)
async def update_professional(
    professional_id: int,
    request: ProfessionalUpdateRequest,
    db: Session = Depends(get_db)
) -> ProfessionalResponse:
    require_positive_id(professional_id, "professional ID")
    professional = ProfessionalService.update_professional(
        db,
        professional_id,
        name=request.name,
        specialty=request.specialty,
        service_mode=request.service_mode,
        license_number=request.license_number
    )
    return ProfessionalResponse.from_record(professional)


@router.delete("/{professional_id}", summary="Delete professional",
               status_code=status.HTTP_204_NO_CONTENT)
async def delete_professional(
    professional_id: int,
    db: Session = Depends(get_db)
) -> Response:
    """
    Delete a professional.

    Returns 409 while the professional is still linked to a consultation.
    """
    require_positive_id(professional_id, "professional ID")
    ProfessionalService.delete_professional(db, professional_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
