"""Retention sweeps for stored keys and verification records.

The two sweeps use different time bases (interval numbers for keys,
wall-clock instants for verifications) and are kept separately callable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from exposure_store.core.settings import Settings, settings
from exposure_store.db.time import utcnow
from exposure_store.services.interval import to_interval
from exposure_store.services.key_store import DiagnosisKeyStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetentionResult:
    """Summary of one retention run."""

    key_cutoff: int
    verification_cutoff: datetime
    keys_deleted: int = 0
    verifications_deleted: int = 0


class RetentionService:
    """Computes retention cutoffs from settings and applies them to a store."""

    def __init__(self, store: DiagnosisKeyStore, config: Settings | None = None) -> None:
        self.store = store
        self.config = config or settings

    def key_cutoff(self, now: datetime | None = None) -> int:
        """Return the first interval that is still retained."""
        current = to_interval(now or utcnow(), self.config.interval_length_hours)
        return current - self.config.key_retention_intervals

    def verification_cutoff(self, now: datetime | None = None) -> datetime:
        """Return the oldest acceptance time that is still retained."""
        return (now or utcnow()) - timedelta(hours=self.config.verification_retention_hours)

    def delete_expired_keys(self, now: datetime | None = None) -> int:
        """Delete keys in intervals older than the retention window."""
        return self.store.delete_keys_before(self.key_cutoff(now))

    def delete_expired_verifications(self, now: datetime | None = None) -> int:
        """Delete verification records older than the retention window."""
        return self.store.delete_verifications_before(self.verification_cutoff(now))

    def run(
        self,
        now: datetime | None = None,
        *,
        keys: bool = True,
        verifications: bool = True,
        dry_run: bool = False,
    ) -> RetentionResult:
        """Run the selected sweeps against a single reference time.

        Args:
            now: Reference time for both cutoffs; defaults to the current time.
            keys: Whether to sweep stored keys.
            verifications: Whether to sweep verification records.
            dry_run: Compute the cutoffs without deleting anything.
        """
        now = now or utcnow()
        result = RetentionResult(
            key_cutoff=self.key_cutoff(now),
            verification_cutoff=self.verification_cutoff(now),
        )
        if dry_run:
            logger.info(
                "Dry run: would delete keys before interval %d and verifications before %s",
                result.key_cutoff,
                result.verification_cutoff.isoformat(),
            )
            return result

        keys_deleted = self.delete_expired_keys(now) if keys else 0
        verifications_deleted = self.delete_expired_verifications(now) if verifications else 0
        logger.info(
            "Retention sweep removed %d keys and %d verification records",
            keys_deleted,
            verifications_deleted,
        )
        return RetentionResult(
            key_cutoff=result.key_cutoff,
            verification_cutoff=result.verification_cutoff,
            keys_deleted=keys_deleted,
            verifications_deleted=verifications_deleted,
        )
