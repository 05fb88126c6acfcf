from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")

# Upper bound for a single weight, rate or extra entry.
AMOUNT_LIMIT = Decimal("1000000000")


def to_amount(value: object) -> Decimal:
    """Coerce form/JSON input to a Decimal; blank or missing reads as 0."""
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return Decimal(0)
        try:
            result = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid amount: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def check_amount(value: Decimal) -> Decimal:
    if abs(value) >= AMOUNT_LIMIT:
        raise ValueError(f"Amount too large: {value} (limit {AMOUNT_LIMIT})")
    return value


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(text: str) -> Decimal | None:
    """Parse a user-typed amount. Returns None on invalid or out-of-range input."""
    text = (text or "").strip()
    if not text:
        return None
    try:
        return check_amount(to_amount(text))
    except ValueError:
        return None


def format_inr(amount: Decimal | float | int, symbol: str = "₹") -> str:
    """Format with Indian digit grouping: 123456.5 -> '₹ 1,23,456.50'"""
    value = round_money(to_amount(amount))
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups) + "," + tail
    formatted = f"{sign}{whole}.{fraction}"
    return f"{symbol} {formatted}" if symbol else formatted
