"""Pytest configuration and fixtures."""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ["DEBUG"] = "true"
os.environ["API_KEYS"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["TARE_GRAMS"] = "136"
os.environ["RATE_PER_GRAM"] = "230"

from scentvalue.models.assistant import BatchItem  # noqa: E402
from scentvalue.models.common import PricingConfig  # noqa: E402
from scentvalue.services import LedgerService, PricingService, StubAssistant  # noqa: E402
from scentvalue.storage import InMemoryLedgerStore  # noqa: E402


@pytest.fixture
def pricing_config() -> PricingConfig:
    """Default tare 136g, rate 230 TSh/g."""
    return PricingConfig(tare_grams=136, rate_per_gram=230, currency="TSh")


@pytest.fixture
def pricing(pricing_config) -> PricingService:
    return PricingService(pricing_config)


@pytest.fixture
def ledger(pricing) -> LedgerService:
    """Fresh, empty ledger."""
    return LedgerService(store=InMemoryLedgerStore(), pricing=pricing)


@pytest.fixture
def sample_batch_items() -> list:
    """Lines a batch document scan might return."""
    return [
        BatchItem(name="Sauvage Dior", weight=1050),
        BatchItem(name="Blue de Chanel", weight=1136),
    ]


@pytest.fixture
def stub_assistant(sample_batch_items) -> StubAssistant:
    return StubAssistant(
        answer="Net weight is gross minus 136g.",
        scale_weight=1236,
        batch_items=sample_batch_items,
    )


@pytest.fixture
def api_client(ledger, stub_assistant) -> Generator[TestClient, None, None]:
    """FastAPI test client with a fresh ledger and the stub assistant."""
    from api.dependencies import get_assistant, get_ledger_service
    from api.main import app

    app.dependency_overrides[get_ledger_service] = lambda: ledger
    app.dependency_overrides[get_assistant] = lambda: stub_assistant

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
