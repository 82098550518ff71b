"""Schemas for temporary exposure keys."""
from __future__ import annotations

import base64
import binascii
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

KEY_LENGTH_BYTES: Final[int] = 16
MAX_TRANSMISSION_RISK_LEVEL: Final[int] = 8
DEFAULT_ROLLING_PERIOD: Final[int] = 144


class TemporaryExposureKey(BaseModel):
    """A diagnosis key as submitted by a client.

    Instances are immutable and compare equal when every field is equal.
    Only the structural shape of ``key_data`` is checked: it must be
    standard base64 encoding exactly ``KEY_LENGTH_BYTES`` bytes. The stored
    text is the canonical re-encoding of the decoded payload.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key_data: str = Field(..., alias="keyData")
    transmission_risk_level: int = Field(
        ...,
        alias="transmissionRiskLevel",
        ge=0,
        le=MAX_TRANSMISSION_RISK_LEVEL,
    )
    rolling_start_interval_number: int = Field(..., alias="rollingStartIntervalNumber", ge=0)
    rolling_period: int = Field(
        default=DEFAULT_ROLLING_PERIOD,
        alias="rollingPeriod",
        ge=1,
        le=DEFAULT_ROLLING_PERIOD,
    )

    @field_validator("key_data")
    @classmethod
    def _validate_key_data(cls, value: str) -> str:
        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("keyData must be valid base64") from exc
        if len(decoded) != KEY_LENGTH_BYTES:
            raise ValueError(f"keyData must decode to {KEY_LENGTH_BYTES} bytes")
        # Encodings differing only in padding bits name the same key.
        return base64.b64encode(decoded).decode()

    @property
    def key_bytes(self) -> bytes:
        """Return the decoded key payload."""
        return base64.b64decode(self.key_data)

    def sort_key(self) -> tuple[str, int, int, int]:
        """Return the total ordering used for deterministic interval reads."""
        return (
            self.key_data,
            self.rolling_start_interval_number,
            self.rolling_period,
            self.transmission_risk_level,
        )
