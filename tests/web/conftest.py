"""Web test fixtures: TestClient over the in-memory storage backend."""

from __future__ import annotations

import pytest

from roadbill.repositories.factory import get_bill_repository
from roadbill.settings import settings
from roadbill.storage.factory import get_storage
from tests.conftest import make_bill


@pytest.fixture(autouse=True)
def memory_backend(monkeypatch):
    """Point every factory at a fresh in-memory store."""
    monkeypatch.setattr(settings, "storage_backend", "memory")
    monkeypatch.setattr(settings, "storage_cache", False)
    get_storage.cache_clear()
    get_bill_repository.cache_clear()
    yield get_storage()


def create_bill_in_store(**overrides):
    """Create a bill through the service, as the routes would."""
    from web.deps import get_bill_service

    return get_bill_service().create_bill(make_bill(**overrides))


def bill_payload(**overrides) -> dict:
    payload = {
        "billNo": "ARC/2024/001",
        "toMs": "Sai Logistics",
        "date": "2024-03-05",
        "items": [
            {
                "lrNo": "LR-101",
                "date": "2024-03-05",
                "vehicleNo": "MH15AB1234",
                "destination": "Pune",
                "invoiceNo": "INV-9",
                "weight": 10,
                "rate": 5,
                "extra": 2,
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)
