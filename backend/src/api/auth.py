# pyright: reportMissingTypeStubs=false
"""
Authentication API endpoints.

Patients log in with their national ID (CPF) and password and receive a
signed bearer token carrying the PATIENT role.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from core.constants import PATIENT_ROLE
from core.database import get_db
from services import PatientService
from services.jwt_service import TokenPayload, jwt_service
from auth.dependencies import require_authenticated
from api.responses import LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    """Request model for patient login."""
    national_id: str
    password: str


@router.post("/login", summary="Patient login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: Session = Depends(get_db)
) -> LoginResponse:
    """
    Exchange a national ID and password for an access token.

    Returns 401 with the same message whether the national ID is unknown or
    the password is wrong.
    """
    patient = PatientService.authenticate(db, request.national_id, request.password)
    if patient is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid national ID or password"
        )

    token = jwt_service.issue_token(
        subject=patient.national_id,
        claims={"groups": [PATIENT_ROLE]},
    )
    logger.info(f"Patient {patient.id} logged in")
    return LoginResponse(token=token)


@router.get("/verify", summary="Verify access token")
async def verify_token(
    payload: TokenPayload = Depends(require_authenticated)
) -> Dict[str, Any]:
    """
    Verify that the provided access token is valid and return its claims.

    Raises 401 if the token is missing, invalid or expired.
    """
    return {
        "subject": payload.sub,
        "groups": payload.groups,
        "expires_at": payload.exp,
    }
