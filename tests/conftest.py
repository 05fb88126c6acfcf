"""Shared fixtures: sample bills and an in-memory bill store."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from roadbill.models.bill import Bill, LineItem
from roadbill.repositories.json_store import JsonBillRepository
from roadbill.storage.memory import MemoryStorage


def make_item(**overrides) -> LineItem:
    defaults = dict(
        lr_no="LR-101",
        date="05.03.2024",
        vehicle_no="MH15AB1234",
        destination="Pune",
        invoice_no="INV-9",
        weight=Decimal("10"),
        rate=Decimal("5"),
        extra=Decimal("2"),
    )
    defaults.update(overrides)
    return LineItem(**defaults)


def make_bill(**overrides) -> Bill:
    defaults = dict(
        bill_no="ARC/2024/001",
        to_ms="Sai Logistics",
        date="05.03.2024",
        items=[make_item()],
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def sample_item() -> LineItem:
    return make_item()


@pytest.fixture()
def sample_bill() -> Bill:
    return make_bill()


@pytest.fixture()
def stored_bill() -> Bill:
    """A bill as it looks after a round trip through the service."""
    return make_bill(
        id="01HQ0000000000000000000000",
        grand_total=Decimal("52.00"),
        amount_in_words="FIFTY TWO ONLY",
        checked_by="ADMIN",
        prepared_by="ARC",
        created_at=datetime(2024, 3, 5, 10, 30),
        items=[make_item(sr_no=1, total=Decimal("52.00"))],
    )


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def bill_repo(memory_storage) -> JsonBillRepository:
    return JsonBillRepository(memory_storage)


@pytest.fixture(autouse=True)
def _reset_factories():
    """Factories cache one instance per process; give each test a fresh one."""
    from roadbill.repositories.factory import get_bill_repository
    from roadbill.storage.factory import get_storage

    get_storage.cache_clear()
    get_bill_repository.cache_clear()
    yield
    get_storage.cache_clear()
    get_bill_repository.cache_clear()


@pytest.fixture()
def png_bytes() -> bytes:
    from io import BytesIO

    from PIL import Image

    buf = BytesIO()
    Image.new("RGBA", (40, 20), (20, 40, 200, 255)).save(buf, format="PNG")
    return buf.getvalue()
