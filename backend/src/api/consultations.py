"""
Consultation Management API endpoints.
"""

import logging
from datetime import date as date_type
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field, field_validator, model_validator
from sqlalchemy.orm import Session

from core.constants import MAX_CONSULTATION_KIND_LENGTH
from core.database import get_db
from services import ConsultationService
from services.consultation_service import MAX_REASON_LENGTH
from utils.id_utils import require_positive_id
from utils.record_validators import validate_consultation_date, validate_record_id, validate_required_text
from api.responses import ConsultationListResponse, ConsultationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_professional_ids(v: Optional[List[int]]) -> Optional[List[int]]:
    if v is None:
        return None
    return [validate_record_id(professional_id, 'Professional ID') for professional_id in v]


class ConsultationCreateRequest(BaseModel):
    """Request model for creating a consultation."""
    kind: str
    date: date_type
    reason: str
    professional_ids: List[int] = Field(default_factory=list)

    @field_validator('kind')
    @classmethod
    def validate_kind(cls, v: str) -> str:
        return validate_required_text(v, 'Kind', MAX_CONSULTATION_KIND_LENGTH)

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v: Union[str, date_type]) -> date_type:
        """Validate date format (YYYY-MM-DD)."""
        return validate_consultation_date(v)

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v: str) -> str:
        return validate_required_text(v, 'Reason', MAX_REASON_LENGTH)

    @field_validator('professional_ids')
    @classmethod
    def validate_professional_ids(cls, v: List[int]) -> List[int]:
        return _validate_professional_ids(v)


class ConsultationUpdateRequest(BaseModel):
    """
    Request model for updating a consultation.

    ``professional_ids`` replaces the linked professionals when present,
    including as an empty list.
    """
    kind: Optional[str] = None
    date: Optional[date_type] = None
    reason: Optional[str] = None
    professional_ids: Optional[List[int]] = None

    @field_validator('kind')
    @classmethod
    def validate_kind(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return validate_required_text(v, 'Kind', MAX_CONSULTATION_KIND_LENGTH)

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v: Union[str, date_type, None]) -> Optional[date_type]:
        if v is None:
            return None
        return validate_consultation_date(v)

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return validate_required_text(v, 'Reason', MAX_REASON_LENGTH)

    @field_validator('professional_ids')
    @classmethod
    def validate_professional_ids(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        return _validate_professional_ids(v)

    @model_validator(mode='after')
    def validate_at_least_one_field(self):
        """Ensure at least one field is provided for update."""
        if not self.model_dump(exclude_none=True):
            raise ValueError('At least one field must be provided for update')
        return self


@router.get("", summary="List all consultations", response_model=ConsultationListResponse)
async def list_consultations(db: Session = Depends(get_db)) -> ConsultationListResponse:
    """Get all consultations, most recent date first, with their professionals."""
    consultations = ConsultationService.list_consultations(db)
    return ConsultationListResponse(
        consultations=[ConsultationResponse.from_record(c) for c in consultations]
    )


@router.get("/{consultation_id}", summary="Get consultation", response_model=ConsultationResponse)
async def get_consultation(
    consultation_id: int,
    db: Session = Depends(get_db)
) -> ConsultationResponse:
    """Get a single consultation with its professionals."""
    require_positive_id(consultation_id, "consultation ID")
    consultation = ConsultationService.get_consultation(db, consultation_id)
    return ConsultationResponse.from_record(consultation)


@router.post("", summary="Create consultation", response_model=ConsultationResponse,
             status_code=status.HTTP_201_CREATED)
async def create_consultation(
    request: ConsultationCreateRequest,
    response: Response,
    db: Session = Depends(get_db)
) -> ConsultationResponse:
    """
    Create a consultation linked to the given professionals.

    Every professional ID must exist; otherwise nothing is created.
    """
    consultation = ConsultationService.create_consultation(
        db,
        kind=request.kind,
        date=request.date,
        reason=request.reason,
        professional_ids=request.professional_ids
    )
    response.headers["Location"] = f"/api/consultations/{consultation.id}"
    logger.info(f"Consultation {consultation.id} created via API")
    return ConsultationResponse.from_record(consultation)


@router.put("/{consultation_id}", summary="Update consultation", response_model=ConsultationResponse)
async def update_consultation(
    consultation_id: int,
    request: ConsultationUpdateRequest,
    db: Session = Depends(get_db)
) -> ConsultationResponse:
    """Update the provided fields of a consultation."""
    require_positive_id(consultation_id, "consultation ID")
    consultation = ConsultationService.update_consultation(
        db,
        consultation_id,
        kind=request.kind,
        date=request.date,
        reason=request.reason,
        professional_ids=request.professional_ids
    )
    return ConsultationResponse.from_record(consultation)


@router.delete("/{consultation_id}", summary="Delete consultation",
               status_code=status.HTTP_204_NO_CONTENT)
async def delete_consultation(
    consultation_id: int,
    db: Session = Depends(get_db)
) -> Response:
    """
    Delete a consultation and its professional links.

    Returns 409 if other records still reference the consultation.
    """
    require_positive_id(consultation_id, "consultation ID")
    ConsultationService.delete_consultation(db, consultation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
