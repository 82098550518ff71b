# src/exposure_store/models/__init__.py
"""SQLAlchemy models for the exposure store."""

from .diagnosis_key import DiagnosisKey
from .verification import TokenVerification

__all__ = [
    "DiagnosisKey",
    "TokenVerification",
]
