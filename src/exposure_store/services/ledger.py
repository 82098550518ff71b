"""Verification ledger deciding whether a submission may be stored.

Each verification identity may bind exactly one batch hash. The first
submission under an identity binds its hash; a later submission with the
same hash is a benign replay, a later submission with another hash is
treated as tampering.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import delete
from sqlalchemy.orm import Session

from exposure_store.db.time import utcnow
from exposure_store.db.upsert import insert_ignoring_conflicts
from exposure_store.models import TokenVerification

logger = logging.getLogger(__name__)


def _as_utc(instant: datetime) -> datetime:
    # SQLite drops the offset on storage, so every stored instant must be UTC.
    if instant.tzinfo is None:
        raise ValueError("Verification timestamps must be timezone-aware")
    return instant.astimezone(UTC)


class VerificationConflictError(RuntimeError):
    """Raised when a verification id is reused with a different batch hash."""

    def __init__(self, verification_id: int) -> None:
        super().__init__(
            f"Verification {verification_id} is already bound to a different batch"
        )
        self.verification_id = verification_id


class Decision(Enum):
    """Outcome of consulting the ledger for one submission."""

    ACCEPT = "accept"
    DEDUPE = "dedupe"
    REJECT = "reject"


class VerificationLedger:
    """Persisted map from verification id to the accepted batch hash.

    The ledger never holds its own session. Callers pass the session of the
    transaction the decision belongs to, so that binding an identity and
    storing its keys commit or roll back together.
    """

    def decide(
        self,
        session: Session,
        verification_id: int,
        batch_hash: str,
        *,
        now: datetime | None = None,
    ) -> Decision:
        """Bind ``batch_hash`` to ``verification_id`` if unseen, else compare.

        The bind is an ``INSERT ... ON CONFLICT DO NOTHING`` on the unique
        verification id, so of two concurrent first submissions exactly one
        inserts and the other observes the winner's row.
        """
        stmt = insert_ignoring_conflicts(session, TokenVerification.__table__).values(
            verification_id=verification_id,
            batch_hash=batch_hash,
            accepted_at=_as_utc(now or utcnow()),
        )
        if session.execute(stmt).rowcount == 1:
            return Decision.ACCEPT

        existing = session.get(TokenVerification, verification_id, populate_existing=True)
        if existing is None:
            # Purged by a retention sweep between the insert and the read.
            if session.execute(stmt).rowcount == 1:
                return Decision.ACCEPT
            existing = session.get(TokenVerification, verification_id, populate_existing=True)
            if existing is None:
                raise RuntimeError(
                    f"Verification {verification_id} could neither be bound nor read back"
                )

        if existing.batch_hash == batch_hash:
            return Decision.DEDUPE
        return Decision.REJECT

    def delete_verifications_before(self, session: Session, before: datetime) -> int:
        """Remove records accepted strictly before ``before``; return how many."""
        result = session.execute(
            delete(TokenVerification)
            .where(TokenVerification.accepted_at < _as_utc(before))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
