from __future__ import annotations

from datetime import datetime, timezone

import pytest
from flask.testing import FlaskClient

from fire_tracker.app import create_app
from fire_tracker.core.rates import ExchangeRate
from fire_tracker.schemas.records import Settings
from fire_tracker.store import InMemoryRecordStore


class StubRateProvider:
    def __init__(self, rate: float = 1.6, fallback: bool = False):
        self.rate = rate
        self.fallback = fallback
        self.calls = 0

    def fetch(self) -> ExchangeRate:
        self.calls += 1
        return ExchangeRate(
            rate=self.rate,
            timestamp=datetime(2024, 6, 1, tzinfo=timezone.utc),
            fallback=self.fallback,
        )


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        fireTarget=1_000_000,
        withdrawalRate=0.04,
        expectedReturn=0.07,
        inflationRate=0.03,
        retirementAge=65,
        currentAge=30,
        currency="NZD",
    )


@pytest.fixture()
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture()
def rate_provider() -> StubRateProvider:
    return StubRateProvider()


@pytest.fixture()
def app(store, rate_provider):
    return create_app(
        config={"TESTING": True, "LOG_LEVEL": "WARNING"},
        store=store,
        rate_provider=rate_provider,
    )


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
