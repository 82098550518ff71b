# src/exposure_store/utils/hash.py
"""Hashing helpers for deriving batch fingerprints."""

from __future__ import annotations

from collections.abc import Iterable

from blake3 import blake3

from exposure_store.schemas.diagnosis_key import TemporaryExposureKey


def blake3_hexdigest(data: bytes) -> str:
    """Return the hexadecimal BLAKE3 digest of the supplied data."""
    return blake3(data).hexdigest()


def batch_checksum(keys: Iterable[TemporaryExposureKey]) -> str:
    """Return an order-independent fingerprint of a key batch.

    Keys are serialized one per line in their sorted order, so the same set
    of keys always yields the same checksum regardless of submission order.
    """
    lines = [
        "{}:{}:{}:{}".format(
            key.key_data,
            key.transmission_risk_level,
            key.rolling_start_interval_number,
            key.rolling_period,
        )
        for key in sorted(keys, key=TemporaryExposureKey.sort_key)
    ]
    return blake3_hexdigest("\n".join(lines).encode())
