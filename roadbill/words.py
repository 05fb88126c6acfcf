"""Spell out rupee amounts using the Indian numbering system.

    >>> amount_to_words(1234.50)
    'ONE THOUSAND TWO HUNDRED THIRTY FOUR AND PAISE FIFTY ONLY'
    >>> amount_to_words(100000)
    'ONE LAKH ONLY'
"""

from __future__ import annotations

from decimal import Decimal

from roadbill.models import round_money, to_amount

ONES = ("", "ONE", "TWO", "THREE", "FOUR", "FIVE", "SIX", "SEVEN", "EIGHT", "NINE")
TEENS = (
    "TEN",
    "ELEVEN",
    "TWELVE",
    "THIRTEEN",
    "FOURTEEN",
    "FIFTEEN",
    "SIXTEEN",
    "SEVENTEEN",
    "EIGHTEEN",
    "NINETEEN",
)
TENS = ("", "", "TWENTY", "THIRTY", "FORTY", "FIFTY", "SIXTY", "SEVENTY", "EIGHTY", "NINETY")

# Largest first; each entry is (magnitude, word).
MAGNITUDES = (
    (10_000_000, "CRORE"),
    (100_000, "LAKH"),
    (1_000, "THOUSAND"),
    (100, "HUNDRED"),
)

PAISE_CONNECTOR = "AND PAISE"
SUFFIX = "ONLY"


def integer_to_words(num: int) -> str:
    """Words for a non-negative integer; 0 gives ''."""
    if num < 10:
        return ONES[num]
    if num < 20:
        return TEENS[num - 10]
    if num < 100:
        return " ".join(w for w in (TENS[num // 10], ONES[num % 10]) if w)
    for magnitude, word in MAGNITUDES:
        if num >= magnitude:
            head, rest = divmod(num, magnitude)
            parts = [integer_to_words(head), word]
            if rest:
                parts.append(integer_to_words(rest))
            return " ".join(parts)
    raise AssertionError("unreachable")  # pragma: no cover


def split_amount(amount: Decimal) -> tuple[int, int]:
    """Return (rupees, paise) after rounding to whole paise."""
    value = round_money(amount)
    rupees = int(value)
    paise = int((value - rupees) * 100)
    return rupees, paise


def amount_to_words(amount: Decimal | float | int | str) -> str:
    value = to_amount(amount)
    if not value.is_finite():
        raise ValueError(f"Amount must be a finite number: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must not be negative: {amount!r}")

    rupees, paise = split_amount(value)
    if rupees == 0 and paise == 0:
        return ""

    parts = []
    if rupees:
        parts.append(integer_to_words(rupees))
    if paise:
        parts.append(PAISE_CONNECTOR if rupees else "PAISE")
        parts.append(integer_to_words(paise))
    parts.append(SUFFIX)
    return " ".join(parts)
