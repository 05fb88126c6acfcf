"""Sequential bill numbers of the form ``PREFIX/YYYY/NNN``.

Numbers restart at 001 every calendar year. The sequence is zero-padded to
three digits and widens past 999 (``ARC/2024/1000``) instead of wrapping.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from roadbill.constants import now
from roadbill.errors import GenerationError
from roadbill.models.bill import Bill

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 3


def bill_no_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}/(\d{{4}})/(\d{{{SEQUENCE_WIDTH},}})$")


def format_bill_no(prefix: str, year: int, sequence: int) -> str:
    return f"{prefix}/{year:04d}/{sequence:0{SEQUENCE_WIDTH}d}"


def parse_bill_no(bill_no: str, prefix: str) -> tuple[int, int] | None:
    """Return (year, sequence) for a well-formed number, else None."""
    match = bill_no_pattern(prefix).match(bill_no or "")
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def generate_next_bill_no(bills: Iterable[Bill], prefix: str = "ARC", year: int | None = None) -> str:
    if not prefix or "/" in prefix:
        raise GenerationError(f"Unusable bill number prefix: {prefix!r}")
    if year is None:
        year = now().year

    latest = 0
    for bill in bills:
        parsed = parse_bill_no(bill.bill_no, prefix)
        if parsed is None:
            continue
        bill_year, sequence = parsed
        if bill_year == year and sequence > latest:
            latest = sequence

    result = format_bill_no(prefix, year, latest + 1)
    logger.debug("Next bill number: %s (latest sequence for %d was %d)", result, year, latest)
    return result
