import pytest
from freezegun import freeze_time

from roadbill.errors import GenerationError
from roadbill.numbering import format_bill_no, generate_next_bill_no, parse_bill_no
from tests.conftest import make_bill


def _bills(*numbers):
    return [make_bill(bill_no=n) for n in numbers]


class TestParseBillNo:
    def test_well_formed(self):
        assert parse_bill_no("ARC/2024/007", "ARC") == (2024, 7)

    def test_widened_sequence(self):
        assert parse_bill_no("ARC/2024/1000", "ARC") == (2024, 1000)

    def test_other_prefix(self):
        assert parse_bill_no("XYZ/2024/007", "ARC") is None

    def test_short_sequence(self):
        assert parse_bill_no("ARC/2024/7", "ARC") is None

    def test_empty(self):
        assert parse_bill_no("", "ARC") is None


class TestFormatBillNo:
    def test_pads_to_three(self):
        assert format_bill_no("ARC", 2024, 7) == "ARC/2024/007"

    def test_widens(self):
        assert format_bill_no("ARC", 2024, 1000) == "ARC/2024/1000"


class TestGenerateNextBillNo:
    def test_no_bills(self):
        assert generate_next_bill_no([], year=2024) == "ARC/2024/001"

    def test_previous_year_resets(self):
        assert generate_next_bill_no(_bills("ARC/2023/005"), year=2024) == "ARC/2024/001"

    def test_increments_current_year(self):
        assert generate_next_bill_no(_bills("ARC/2024/009"), year=2024) == "ARC/2024/010"

    def test_takes_numeric_maximum(self):
        bills = _bills("ARC/2024/010", "ARC/2024/002", "ARC/2024/009")
        assert generate_next_bill_no(bills, year=2024) == "ARC/2024/011"

    def test_future_year_ignored(self):
        bills = _bills("ARC/2025/050", "ARC/2024/003")
        assert generate_next_bill_no(bills, year=2024) == "ARC/2024/004"

    def test_malformed_numbers_ignored(self):
        bills = _bills("garbage", "", "ARC-2024-100", "ARC/2024/002")
        assert generate_next_bill_no(bills, year=2024) == "ARC/2024/003"

    def test_overflow_widens(self):
        assert generate_next_bill_no(_bills("ARC/2024/999"), year=2024) == "ARC/2024/1000"

    def test_widened_numbers_keep_counting(self):
        bills = _bills("ARC/2024/999", "ARC/2024/1000")
        assert generate_next_bill_no(bills, year=2024) == "ARC/2024/1001"

    def test_custom_prefix(self):
        bills = _bills("ARC/2024/009", "XYZ/2024/002")
        assert generate_next_bill_no(bills, prefix="XYZ", year=2024) == "XYZ/2024/003"

    @freeze_time("2024-06-15 12:00:00")
    def test_defaults_to_current_year(self):
        assert generate_next_bill_no(_bills("ARC/2024/009", "ARC/2023/100")) == "ARC/2024/010"

    @freeze_time("2025-01-01 08:00:00")
    def test_new_year_restarts(self):
        assert generate_next_bill_no(_bills("ARC/2024/120")) == "ARC/2025/001"

    def test_empty_prefix_rejected(self):
        with pytest.raises(GenerationError):
            generate_next_bill_no([], prefix="", year=2024)

    def test_prefix_with_slash_rejected(self):
        with pytest.raises(GenerationError):
            generate_next_bill_no([], prefix="A/B", year=2024)

    def test_result_matches_format(self):
        result = generate_next_bill_no(_bills("ARC/2024/041"), year=2024)
        assert parse_bill_no(result, "ARC") == (2024, 42)
