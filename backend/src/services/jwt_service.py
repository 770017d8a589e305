"""
JWT Service for access token management.

Issues and validates the signed bearer tokens handed out on login.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import jwt
from pydantic import BaseModel

from core.config import JWT_ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ISSUER, JWT_SECRET_KEY


class TokenPayload(BaseModel):
    """Payload structure for JWT tokens."""
    sub: str  # National ID for patients
    iss: str
    groups: List[str] = []  # Roles granted to the subject, e.g. ["PATIENT"]
    iat: Optional[int] = None  # Set by JWT service
    exp: Optional[int] = None  # Set by JWT service


class JWTService:
    """Service for JWT token operations."""

    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    @classmethod
    def issue_token(
        cls,
        subject: str,
        claims: Optional[Dict[str, Any]] = None,
        ttl: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed access token.

        Args:
            subject: Value of the ``sub`` claim
            claims: Extra claims, e.g. ``{"groups": ["PATIENT"]}``
            ttl: Token lifetime; defaults to JWT_ACCESS_TOKEN_EXPIRE_MINUTES

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        lifetime = ttl if ttl is not None else timedelta(minutes=cls.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode: Dict[str, Any] = dict(claims or {})
        to_encode.update({
            "sub": subject,
            "iss": JWT_ISSUER,
            "iat": now,
            "exp": now + lifetime,
        })
        return jwt.encode(to_encode, cls._get_secret_key(), algorithm=cls.ALGORITHM)

    @classmethod
    def verify_token(cls, token: str) -> Optional[TokenPayload]:
        """Verify and decode a JWT token; None if invalid, expired or from another issuer."""
        try:
            payload = jwt.decode(
                token,
                cls._get_secret_key(),
                algorithms=[cls.ALGORITHM],
                issuer=JWT_ISSUER,
            )
            return TokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None

    @classmethod
    def get_token_expiry(cls) -> datetime:
        """Get expiry datetime for a token issued now with the default lifetime."""
        return datetime.now(timezone.utc) + timedelta(minutes=cls.ACCESS_TOKEN_EXPIRE_MINUTES)

    @classmethod
    def _get_secret_key(cls) -> str:
        """Get the JWT secret key."""
        return JWT_SECRET_KEY


# Global instance
jwt_service = JWTService()
