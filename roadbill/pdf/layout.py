"""Table layout shared by the PDF renderer and the HTML bill view."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from roadbill.constants import MIN_TABLE_ROWS
from roadbill.models import format_inr, round_money
from roadbill.models.bill import Bill, LineItem


class TableRow(BaseModel):
    number: int
    item: LineItem | None = None

    @property
    def is_blank(self) -> bool:
        return self.item is None

    @property
    def cells(self) -> list[str]:
        """The ten column values, in header order."""
        if self.item is None:
            return [str(self.number)] + [""] * 9
        item = self.item
        return [
            str(self.number),
            item.lr_no,
            item.date,
            item.vehicle_no,
            item.destination,
            item.invoice_no,
            format_quantity(item.weight),
            format_quantity(item.rate),
            format_extra(item.extra),
            format_amount(item.total),
        ]


def build_table_rows(bill: Bill, min_rows: int = MIN_TABLE_ROWS) -> list[TableRow]:
    """Valid items renumbered from 1, padded with blank rows up to ``min_rows``."""
    rows = [TableRow(number=index, item=item) for index, item in enumerate(bill.valid_items, start=1)]
    for number in range(len(rows) + 1, min_rows + 1):
        rows.append(TableRow(number=number))
    return rows


def format_amount(value: Decimal) -> str:
    return f"{round_money(value):.2f}"


def format_quantity(value: Decimal) -> str:
    """Plain number without trailing zeros: 10.50 -> '10.5', 10.00 -> '10'."""
    if value == value.to_integral_value():
        return str(int(value))
    return f"{value.normalize():f}"


def format_extra(value: Decimal) -> str:
    return format_quantity(value) if value else "-"


def format_grand_total(value: Decimal, symbol: str = "₹") -> str:
    return format_inr(value, symbol=symbol)
