# src/exposure_store/db/time.py
"""Clock used for verification ledger timestamps and retention cutoffs."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime.

    Ledger ``accepted_at`` values and verification retention cutoffs are
    always produced here, so they compare consistently on every backend.
    """
    return datetime.now(UTC)
