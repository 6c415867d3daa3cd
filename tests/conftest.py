"""Shared fixtures: in-memory storage, a controllable clock, a stock price table."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from parking_ledger.database import create_tables
from parking_ledger.services.ledger_store import LedgerStore
from parking_ledger.services.price_table import PriceConfig
from parking_ledger.services.storage_service import KeyValueStorage


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


def make_prices(**overrides) -> PriceConfig:
    values = dict(
        max_motorcycles=50,
        max_cars=30,
        hourly_motorcycle_rate=2000,
        hourly_car_rate=5000,
        monthly_motorcycle_rate=40000,
        monthly_car_rate=100000,
    )
    values.update(overrides)
    return PriceConfig(**values)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def storage(session_factory):
    return KeyValueStorage(session_factory)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def prices():
    return make_prices()


@pytest.fixture
def ledger(storage, prices, clock):
    return LedgerStore(storage, lambda: prices, clock=clock)
