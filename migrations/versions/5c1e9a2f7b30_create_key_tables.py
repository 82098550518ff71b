"""create diagnosis key and token verification tables

Revision ID: 5c1e9a2f7b30
Revises:
Create Date: 2026-10-17 09:12:44.318502

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e9a2f7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the key store and verification ledger tables."""
    op.create_table(
        "diagnosis_key",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("submission_interval", sa.Integer(), nullable=False),
        sa.Column("verification_id", sa.BigInteger(), nullable=False),
        sa.Column("key_data", sa.Text(), nullable=False),
        sa.Column("transmission_risk_level", sa.Integer(), nullable=False),
        sa.Column("rolling_start_interval_number", sa.Integer(), nullable=False),
        sa.Column("rolling_period", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "submission_interval",
            "key_data",
            "transmission_risk_level",
            "rolling_start_interval_number",
            "rolling_period",
            name="uq_diagnosis_key_content",
        ),
    )
    op.create_index(
        "ix_diagnosis_key_submission_interval",
        "diagnosis_key",
        ["submission_interval"],
    )
    op.create_table(
        "token_verification",
        sa.Column("verification_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("batch_hash", sa.Text(), nullable=False),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("verification_id"),
    )
    op.create_index(
        "ix_token_verification_accepted_at",
        "token_verification",
        ["accepted_at"],
    )


def downgrade() -> None:
    """Drop the key store and verification ledger tables."""
    op.drop_index("ix_token_verification_accepted_at", table_name="token_verification")
    op.drop_table("token_verification")
    op.drop_index("ix_diagnosis_key_submission_interval", table_name="diagnosis_key")
    op.drop_table("diagnosis_key")
