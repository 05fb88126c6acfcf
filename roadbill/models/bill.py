from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from roadbill.models import check_amount, round_money, to_amount

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


class LineItem(BaseModel):
    model_config = _WIRE_CONFIG

    sr_no: int = 0
    lr_no: str = ""
    date: str = ""
    vehicle_no: str = ""
    destination: str = ""
    invoice_no: str = ""
    weight: Decimal = Decimal(0)
    rate: Decimal = Decimal(0)
    extra: Decimal = Decimal(0)
    total: Decimal = Decimal(0)

    @field_validator("lr_no", "date", "vehicle_no", "destination", "invoice_no", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return _as_text(value)

    @field_validator("weight", "rate", "extra", mode="before")
    @classmethod
    def _bounded_amount(cls, value: object) -> Decimal:
        return check_amount(to_amount(value))

    @field_validator("total", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal:
        return to_amount(value)

    @field_validator("sr_no", mode="before")
    @classmethod
    def _sr_no(cls, value: object) -> object:
        if value is None or value == "":
            return 0
        return value

    @field_serializer("weight", "rate", "extra", "total")
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)

    @property
    def is_valid(self) -> bool:
        """Only rows with both an LR number and a vehicle number are shown."""
        return bool(self.lr_no) and bool(self.vehicle_no)

    @property
    def computed_total(self) -> Decimal:
        return round_money(self.weight * self.rate + self.extra)


class Bill(BaseModel):
    model_config = _WIRE_CONFIG

    id: str = ""
    bill_no: str = ""
    to_ms: str = ""
    date: str = ""
    items: list[LineItem] = []
    grand_total: Decimal = Decimal(0)
    amount_in_words: str = ""
    checked_by: str = ""
    prepared_by: str = ""
    created_at: datetime | None = None

    @field_validator("id", "bill_no", "to_ms", "date", "amount_in_words", "checked_by", "prepared_by", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return _as_text(value)

    @field_validator("grand_total", mode="before")
    @classmethod
    def _amount(cls, value: object) -> Decimal:
        return to_amount(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value: object) -> object:
        return value or None

    @field_serializer("grand_total")
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)

    @property
    def valid_items(self) -> list[LineItem]:
        return [item for item in self.items if item.is_valid]

    def to_record(self) -> dict:
        """Wire/persisted form: camelCase keys, JSON-native values."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: dict) -> Bill:
        return cls.model_validate(record)
