"""
Test utilities for clinic records tests.
"""

from datetime import datetime, timedelta, timezone
from typing import List

import jwt

from core.config import JWT_ISSUER, JWT_SECRET_KEY


def create_jwt_token(subject: str, groups: List[str], expires_in: timedelta = timedelta(hours=1),
                     issuer: str = JWT_ISSUER) -> str:
    """Create a JWT token as the login endpoint would, with a configurable lifetime and issuer."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iss": issuer,
        "groups": groups,
        "exp": now + expires_in,
        "iat": now,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm="HS256")
