# src/exposure_store/models/verification.py
"""Models supporting verification-scoped submission idempotence."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from exposure_store.db.session import Base
from exposure_store.db.time import utcnow


class TokenVerification(Base):
    """Record binding a verification identity to the batch accepted under it."""

    __tablename__ = "token_verification"
    __table_args__ = (Index("ix_token_verification_accepted_at", "accepted_at"),)

    # Primary key doubles as the uniqueness constraint that serializes first submissions.
    verification_id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )
    batch_hash: Mapped[str] = mapped_column(Text, nullable=False)
    accepted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
