# src/exposure_store/services/__init__.py
"""Storage services for diagnosis keys."""

from .key_store import DiagnosisKeyStore
from .ledger import Decision, VerificationConflictError, VerificationLedger
from .retention import RetentionResult, RetentionService

__all__ = [
    "DiagnosisKeyStore",
    "Decision",
    "VerificationConflictError",
    "VerificationLedger",
    "RetentionResult",
    "RetentionService",
]
