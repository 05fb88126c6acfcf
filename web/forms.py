from __future__ import annotations

from roadbill.models.bill import LineItem

ITEM_FIELDS = ("lr_no", "date", "vehicle_no", "destination", "invoice_no", "weight", "rate", "extra")


def parse_formset(form_data: dict, prefix: str) -> list[dict[str, str]]:
    """Parse a Django-style formset from form data.

    Expects keys like:
      {prefix}-TOTAL_FORMS, {prefix}-0-lr_no, {prefix}-0-weight, etc.

    Returns a list of dicts, one per form row.
    """
    total_key = f"{prefix}-TOTAL_FORMS"
    try:
        total = int(form_data.get(total_key, "0"))
    except ValueError:
        total = 0
    rows: list[dict[str, str]] = []
    for i in range(total):
        row: dict[str, str] = {}
        row_prefix = f"{prefix}-{i}-"
        for key, value in form_data.items():
            if key.startswith(row_prefix):
                field = key[len(row_prefix):]
                row[field] = str(value)
        if row:
            rows.append(row)
    return rows


def parse_line_items(form_data: dict, prefix: str = "items") -> list[LineItem]:
    """Line items from formset rows; rows left entirely blank are dropped.

    Raises ValueError when a numeric cell cannot be read.
    """
    items = []
    for row in parse_formset(form_data, prefix):
        values = {field: row.get(field, "").strip() for field in ITEM_FIELDS}
        if not any(values.values()):
            continue
        items.append(LineItem(**values))
    return items
