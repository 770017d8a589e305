"""
Record field validation utilities.

Provides centralized validation for patient, professional and consultation
fields. Every validator cleans and returns the value, or raises ValueError,
so the same function can back a pydantic ``field_validator`` and a
service-level check.
"""

import re
from datetime import date as date_type, datetime
from typing import Any, Callable, TypeVar, Union

from core.constants import (
    CONSULTATION_DATE_FORMAT,
    MAX_LICENSE_NUMBER_DIGITS,
    MAX_PASSWORD_LENGTH,
    MAX_PATIENT_AGE,
    MAX_RECORD_ID,
    MAX_TECHNICAL_LEVEL,
    MIN_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_PATIENT_AGE,
    MIN_TECHNICAL_LEVEL,
    NATIONAL_ID_LENGTH,
)
from core.exceptions import ValidationError

T = TypeVar('T')


def validate_required_text(v: str, field_name: str, max_length: int) -> str:
    """
    Trim a required text field and check its length.

    Raises:
        ValueError: If the value is missing, blank, or longer than ``max_length``
    """
    if v is None or not v.strip():
        raise ValueError(f'{field_name} is required')
    v = v.strip()
    if len(v) > max_length:
        raise ValueError(f'{field_name} must be at most {max_length} characters')
    return v


def validate_person_name(v: str, max_length: int) -> str:
    """
    Validate a patient or professional name.

    - Trims whitespace
    - Requires at least MIN_NAME_LENGTH characters
    - Rejects angle brackets
    """
    v = validate_required_text(v, 'Name', max_length)
    if len(v) < MIN_NAME_LENGTH:
        raise ValueError(f'Name must have at least {MIN_NAME_LENGTH} characters')
    if '<' in v or '>' in v:
        raise ValueError('Name contains invalid characters')
    return v


def clean_national_id(national_id: str) -> str:
    """Strip formatting characters (dots, dashes, spaces) from a national id."""
    return re.sub(r'\D', '', national_id)


def validate_national_id(v: str) -> str:
    """
    Validate and clean a national identifier (CPF).

    Accepts formatted input such as ``123.456.789-01``.

    Returns:
        The identifier as exactly NATIONAL_ID_LENGTH digits

    Raises:
        ValueError: If the identifier does not have exactly NATIONAL_ID_LENGTH digits
    """
    if v is None or not v.strip():
        raise ValueError('National ID is required')
    if re.search(r'[^\d.\-\s]', v):
        raise ValueError('Invalid national ID format')
    cleaned = clean_national_id(v)
    if len(cleaned) != NATIONAL_ID_LENGTH:
        raise ValueError(f'National ID must have exactly {NATIONAL_ID_LENGTH} digits')
    return cleaned


def validate_age(v: int) -> int:
    if v is None or not MIN_PATIENT_AGE <= v <= MAX_PATIENT_AGE:
        raise ValueError(f'Age must be between {MIN_PATIENT_AGE} and {MAX_PATIENT_AGE}')
    return v


def validate_technical_level(v: int) -> int:
    if v is None or not MIN_TECHNICAL_LEVEL <= v <= MAX_TECHNICAL_LEVEL:
        raise ValueError(
            f'Technical level must be between {MIN_TECHNICAL_LEVEL} and {MAX_TECHNICAL_LEVEL}'
        )
    return v


def validate_password(v: str) -> str:
    """
    Validate a plaintext password before hashing.

    Passwords are not trimmed: surrounding whitespace is part of the secret.
    """
    if not v:
        raise ValueError('Password is required')
    if not MIN_PASSWORD_LENGTH <= len(v) <= MAX_PASSWORD_LENGTH:
        raise ValueError(
            f'Password must have between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters'
        )
    return v


def validate_record_id(v: int, label: str = 'ID') -> int:
    """Validate a record identifier: positive and within the INTEGER column range."""
    if v is None or v <= 0:
        raise ValueError(f'{label} must be a positive number')
    if v > MAX_RECORD_ID:
        raise ValueError(f'{label} must be at most {MAX_RECORD_ID}')
    return v


def validate_license_number(v: int) -> int:
    """
    Validate a professional license number (CRM).

    Raises:
        ValueError: If the number is not positive or has more than MAX_LICENSE_NUMBER_DIGITS digits
    """
    if v is None or v <= 0:
        raise ValueError('License number must be a positive number')
    if len(str(v)) > MAX_LICENSE_NUMBER_DIGITS:
        raise ValueError(f'License number must have at most {MAX_LICENSE_NUMBER_DIGITS} digits')
    return v


def validate_consultation_date(v: Union[str, date_type]) -> date_type:
    """
    Validate a consultation date given as a date or a YYYY-MM-DD string.

    Raises:
        ValueError: If the value is missing or not a valid calendar date
    """
    if v is None:
        raise ValueError('Date is required')
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date_type):
        return v
    if not v.strip():
        raise ValueError('Date is required')
    try:
        return datetime.strptime(v.strip(), CONSULTATION_DATE_FORMAT).date()
    except ValueError:
        raise ValueError('Invalid date format, expected YYYY-MM-DD')


def ensure_valid(validator: Callable[..., T], value: Any, *args: Any) -> T:
    """
    Run a field validator outside of pydantic.

    Raises:
        ValidationError: With the validator's message if it rejects the value
    """
    try:
        return validator(value, *args)
    except ValueError as e:
        raise ValidationError(str(e)) from e
