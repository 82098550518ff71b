# src/exposure_store/models/diagnosis_key.py
"""SQLAlchemy model for stored diagnosis keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from exposure_store.db.session import Base

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from exposure_store.schemas.diagnosis_key import TemporaryExposureKey


class DiagnosisKey(Base):
    """A temporary exposure key bound to the interval it was submitted under.

    Rows are append-only. They are removed only in bulk by interval threshold.
    """

    __tablename__ = "diagnosis_key"
    __table_args__ = (
        # Submitting an identical key twice into one interval is a set union.
        UniqueConstraint(
            "submission_interval",
            "key_data",
            "transmission_risk_level",
            "rolling_start_interval_number",
            "rolling_period",
            name="uq_diagnosis_key_content",
        ),
        Index("ix_diagnosis_key_submission_interval", "submission_interval"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    submission_interval: Mapped[int] = mapped_column(Integer, nullable=False)
    # No foreign key: the verification ledger is purged on its own schedule.
    verification_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    key_data: Mapped[str] = mapped_column(Text, nullable=False)
    transmission_risk_level: Mapped[int] = mapped_column(Integer, nullable=False)
    rolling_start_interval_number: Mapped[int] = mapped_column(Integer, nullable=False)
    rolling_period: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_key(self) -> TemporaryExposureKey:
        """Return the stored row as an immutable key value object."""
        from exposure_store.schemas.diagnosis_key import TemporaryExposureKey

        return TemporaryExposureKey(
            key_data=self.key_data,
            transmission_risk_level=self.transmission_risk_level,
            rolling_start_interval_number=self.rolling_start_interval_number,
            rolling_period=self.rolling_period,
        )
