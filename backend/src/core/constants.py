"""Application constants and configuration values."""

from core.config import FRONTEND_URL

# Database field lengths
MAX_STRING_LENGTH = 255
MAX_PATIENT_NAME_LENGTH = 50
MAX_PROFESSIONAL_NAME_LENGTH = 80
MAX_SPECIALTY_LENGTH = 50
MAX_SERVICE_MODE_LENGTH = 30
MAX_CONSULTATION_KIND_LENGTH = 100
MIN_NAME_LENGTH = 2

# Database connection settings
DB_POOL_RECYCLE_SECONDS = 300  # 5 minutes

# CORS origins for development and production
_CORS_ORIGINS_RAW = [
    "http://localhost:5173",      # React dev server (Vite) - localhost
    FRONTEND_URL,  # Production URL if FRONTEND_URL is set accordingly
]

# Filter out None values and empty strings to avoid CORS errors
CORS_ORIGINS = [origin for origin in _CORS_ORIGINS_RAW if origin and origin.strip()]

# Identifier columns are 32-bit INTEGER
MAX_RECORD_ID = 2**31 - 1

# Random-sparse identifier range for professionals (inclusive on both ends)
PROFESSIONAL_ID_MIN = 1
PROFESSIONAL_ID_MAX = 9999

# Patient constraints
NATIONAL_ID_LENGTH = 11  # CPF: exactly 11 digits
MIN_PATIENT_AGE = 0
MAX_PATIENT_AGE = 120
MIN_TECHNICAL_LEVEL = 0
MAX_TECHNICAL_LEVEL = 10
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 8

# Professional constraints
MAX_LICENSE_NUMBER_DIGITS = 5  # CRM

# Role granted to patients on login
PATIENT_ROLE = "PATIENT"

# Date format accepted for consultation dates
CONSULTATION_DATE_FORMAT = "%Y-%m-%d"
