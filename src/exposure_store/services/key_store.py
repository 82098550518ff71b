"""Interval-bucketed storage for diagnosis keys."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from exposure_store.db.session import SessionLocal
from exposure_store.db.time import utcnow
from exposure_store.db.upsert import insert_ignoring_conflicts
from exposure_store.models import DiagnosisKey
from exposure_store.schemas.diagnosis_key import TemporaryExposureKey
from exposure_store.services.ledger import (
    Decision,
    VerificationConflictError,
    VerificationLedger,
)

__all__ = ["DiagnosisKeyStore", "get_key_store"]

logger = logging.getLogger(__name__)


class DiagnosisKeyStore:
    """Stores keys per submission interval behind the verification ledger.

    The store keeps no state between calls. Every write opens one
    transaction covering both the ledger decision and the key insert, so a
    batch is visible either completely or not at all.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        ledger: VerificationLedger | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            session_factory: Factory for sessions; defaults to the configured engine.
            ledger: Verification ledger consulted before every insert.
        """
        self._session_factory = session_factory or SessionLocal
        self._ledger = ledger or VerificationLedger()

    def add_keys(
        self,
        verification_id: int,
        batch_hash: str,
        interval: int,
        keys: Sequence[TemporaryExposureKey],
        *,
        now: datetime | None = None,
    ) -> Decision:
        """Store ``keys`` under ``interval`` if the verification allows it.

        Args:
            verification_id: Identity asserted by the upstream verification step.
            batch_hash: Opaque content fingerprint of the submitted batch.
            interval: Submission interval the keys are bucketed into.
            keys: Keys to store.
            now: Acceptance timestamp recorded in the ledger; defaults to now.

        Returns:
            ``Decision.ACCEPT`` if the keys were stored, ``Decision.DEDUPE`` if
            the same batch was already accepted and nothing changed.

        Raises:
            VerificationConflictError: The verification id is bound to another hash.
        """
        with self._session_factory.begin() as session:
            decision = self._ledger.decide(
                session, verification_id, batch_hash, now=now or utcnow()
            )
            if decision is Decision.REJECT:
                logger.warning(
                    "Rejected batch for verification %s: hash differs from the accepted one",
                    verification_id,
                )
                # Raising inside the scope rolls the transaction back.
                raise VerificationConflictError(verification_id)
            if decision is Decision.DEDUPE:
                logger.debug("Ignoring replayed batch for verification %s", verification_id)
                return decision

            stored = 0
            if keys:
                rows = [
                    {
                        "submission_interval": interval,
                        "verification_id": verification_id,
                        "key_data": key.key_data,
                        "transmission_risk_level": key.transmission_risk_level,
                        "rolling_start_interval_number": key.rolling_start_interval_number,
                        "rolling_period": key.rolling_period,
                    }
                    for key in keys
                ]
                result = session.execute(
                    insert_ignoring_conflicts(session, DiagnosisKey.__table__), rows
                )
                # Some drivers report -1 for executemany.
                stored = result.rowcount if result.rowcount >= 0 else len(rows)
            logger.info(
                "Stored %d of %d keys in interval %d for verification %s",
                stored,
                len(keys),
                interval,
                verification_id,
            )
            return decision

    def get_interval_keys(self, interval: int) -> list[TemporaryExposureKey]:
        """Return every key stored for ``interval`` sorted by key content."""
        with self._session_factory() as session:
            rows = session.scalars(
                select(DiagnosisKey).where(DiagnosisKey.submission_interval == interval)
            ).all()
            keys = [row.to_key() for row in rows]
        # Backend collations differ; the order is part of the contract.
        return sorted(keys, key=TemporaryExposureKey.sort_key)

    def get_key_count(self, interval: int) -> int:
        """Return how many keys are stored for ``interval`` (0 if none)."""
        with self._session_factory() as session:
            count = session.scalar(
                select(func.count())
                .select_from(DiagnosisKey)
                .where(DiagnosisKey.submission_interval == interval)
            )
        return int(count or 0)

    def get_available_intervals(self) -> list[int]:
        """Return the ascending list of intervals holding at least one key."""
        with self._session_factory() as session:
            intervals = session.scalars(
                select(DiagnosisKey.submission_interval)
                .distinct()
                .order_by(DiagnosisKey.submission_interval)
            ).all()
        return sorted(int(interval) for interval in intervals)

    def delete_keys_before(self, interval: int) -> int:
        """Delete keys whose interval is strictly below ``interval``; return how many."""
        with self._session_factory.begin() as session:
            result = session.execute(
                delete(DiagnosisKey)
                .where(DiagnosisKey.submission_interval < interval)
                .execution_options(synchronize_session=False)
            )
            deleted = result.rowcount or 0
        if deleted:
            logger.info("Deleted %d keys from intervals before %d", deleted, interval)
        return deleted

    def delete_verifications_before(self, before: datetime) -> int:
        """Delete ledger records accepted strictly before ``before``; return how many."""
        with self._session_factory.begin() as session:
            deleted = self._ledger.delete_verifications_before(session, before)
        if deleted:
            logger.info("Deleted %d verification records accepted before %s", deleted, before)
        return deleted


def get_key_store() -> DiagnosisKeyStore:
    """Return a key store bound to the configured database."""
    return DiagnosisKeyStore()
