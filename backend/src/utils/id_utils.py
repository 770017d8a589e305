from fastapi import HTTPException, status

from core.constants import MAX_RECORD_ID


def require_positive_id(id_value: int, label: str = "ID") -> int:
    """
    Reject path identifiers outside the storable range before touching the database.

    Raises:
        HTTPException: 400 if ``id_value`` is zero, negative or larger than
            the INTEGER columns can hold
    """
    if id_value <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} {id_value}: must be a positive number"
        )
    if id_value > MAX_RECORD_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} {id_value}: must be at most {MAX_RECORD_ID}"
        )
    return id_value
