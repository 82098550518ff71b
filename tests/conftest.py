# tests/conftest.py
from __future__ import annotations

import base64
import os
import random
from collections.abc import Generator, Iterator
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from exposure_store.db.session import Base, use_immediate_transactions
from exposure_store.db.time import utcnow
from exposure_store.schemas.diagnosis_key import (
    DEFAULT_ROLLING_PERIOD,
    KEY_LENGTH_BYTES,
    TemporaryExposureKey,
)
from exposure_store.services.interval import to_10_minute_interval
from exposure_store.services.key_store import DiagnosisKeyStore

TEST_DB_URL = "sqlite://"


class KeyGenerator:
    """Deterministic source of structurally valid exposure keys."""

    def __init__(self, seed: int) -> None:
        self._random = random.Random(seed)
        self._rolling_start = to_10_minute_interval(utcnow() - timedelta(days=1))

    def some_keys(self, count: int) -> list[TemporaryExposureKey]:
        return [self.key(days_back=index) for index in range(count)]

    def key(self, days_back: int = 0) -> TemporaryExposureKey:
        payload = bytes(self._random.getrandbits(8) for _ in range(KEY_LENGTH_BYTES))
        return TemporaryExposureKey(
            key_data=base64.b64encode(payload).decode(),
            transmission_risk_level=self._random.randint(0, 8),
            rolling_start_interval_number=self._rolling_start - days_back * DEFAULT_ROLLING_PERIOD,
            rolling_period=DEFAULT_ROLLING_PERIOD,
        )


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    use_immediate_transactions(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> Iterator[sessionmaker[Session]]:
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    try:
        yield factory
    finally:
        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def store(session_factory: sessionmaker[Session]) -> DiagnosisKeyStore:
    """Return a key store bound to the in-memory test database."""
    return DiagnosisKeyStore(session_factory)


@pytest.fixture()
def key_generator() -> KeyGenerator:
    """Return a key generator with a fixed seed."""
    return KeyGenerator(123)
