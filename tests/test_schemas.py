"""Tests for the temporary exposure key value object."""

from __future__ import annotations

import base64

import pytest
from pydantic import ValidationError

from exposure_store.schemas.diagnosis_key import TemporaryExposureKey

VALID_KEY = "c9Uau9icuBlvDvtokvlNaA=="


def make_key(**overrides) -> TemporaryExposureKey:
    fields = {
        "key_data": VALID_KEY,
        "transmission_risk_level": 2,
        "rolling_start_interval_number": 2_650_000,
        "rolling_period": 144,
    }
    fields.update(overrides)
    return TemporaryExposureKey(**fields)


def test_equality_is_structural() -> None:
    assert make_key() == make_key()
    assert make_key() != make_key(transmission_risk_level=3)
    assert hash(make_key()) == hash(make_key())


def test_keys_are_immutable() -> None:
    key = make_key()
    with pytest.raises(ValidationError):
        key.transmission_risk_level = 5


def test_accepts_wire_aliases() -> None:
    key = TemporaryExposureKey.model_validate(
        {
            "keyData": VALID_KEY,
            "transmissionRiskLevel": 2,
            "rollingStartIntervalNumber": 2_650_000,
            "rollingPeriod": 144,
        }
    )
    assert key == make_key()
    assert key.model_dump(by_alias=True)["keyData"] == VALID_KEY


def test_rolling_period_defaults_to_full_day() -> None:
    key = TemporaryExposureKey(
        key_data=VALID_KEY,
        transmission_risk_level=0,
        rolling_start_interval_number=0,
    )
    assert key.rolling_period == 144


def test_key_bytes_decodes_payload() -> None:
    assert make_key().key_bytes == base64.b64decode(VALID_KEY)
    assert len(make_key().key_bytes) == 16


@pytest.mark.parametrize(
    "overrides",
    [
        {"key_data": "not base64!"},
        {"key_data": base64.b64encode(b"short").decode()},
        {"key_data": base64.b64encode(bytes(32)).decode()},
        {"transmission_risk_level": -1},
        {"transmission_risk_level": 9},
        {"rolling_start_interval_number": -1},
        {"rolling_period": 0},
        {"rolling_period": 145},
    ],
)
def test_structurally_invalid_keys_are_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        make_key(**overrides)


def test_sort_key_orders_by_key_text_first() -> None:
    later = make_key(key_data="ulu19n4b2ii0BJvw5K7XjQ==", rolling_start_interval_number=0)
    earlier = make_key(key_data="0MwsNfC4Rgnl8SxV3YWrqA==", rolling_start_interval_number=9)
    assert sorted([later, earlier], key=TemporaryExposureKey.sort_key) == [earlier, later]


def test_key_data_is_canonicalised() -> None:
    # Same 16 bytes as VALID_KEY with nonzero trailing padding bits.
    key = make_key(key_data="c9Uau9icuBlvDvtokvlNaB==")
    assert key.key_data == VALID_KEY
    assert key == make_key()
