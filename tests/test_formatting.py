"""Tests for display formatting helpers."""

import pytest
from datetime import date, datetime

from buildledger.formatting import (
    csv_text,
    format_bytes,
    format_currency,
    format_currency_symbol,
    format_date,
    format_date_ddmmyyyy,
    format_number,
    format_plain_number,
    format_week_range,
    number_to_bengali_words,
)


class TestNumbers:
    """Tests for number and currency formatting."""

    def test_plain_number(self):
        assert format_plain_number(40.0) == "40"
        assert format_plain_number(7.5) == "7.5"
        assert format_plain_number(-3) == "-3"

    def test_lakh_grouping(self):
        assert format_number(1234567, lakh=True) == "12,34,567"
        assert format_number(123, lakh=True) == "123"
        assert format_number(100000, lakh=True) == "1,00,000"

    def test_western_grouping(self):
        assert format_number(1234567.5, 2) == "1,234,567.50"

    def test_negative_zero_is_unsigned(self):
        assert format_number(-0.4) == "0"

    def test_currency_bdt(self):
        assert format_currency(1234567) == "৳12,34,567"

    def test_currency_negative(self):
        assert format_currency(-5000) == "-৳5,000"

    def test_currency_usd_decimals(self):
        assert format_currency(1234.5, "USD") == "$1,234.50"

    def test_currency_unknown_code_uses_bdt(self):
        assert format_currency(100, "XXX") == "৳100"

    def test_currency_symbol_spaced(self):
        assert format_currency_symbol(2500, "BDT") == "৳ 2,500"

    def test_bengali_words(self):
        assert number_to_bengali_words(5000) == "টাকা 5000 মাত্র"


class TestDates:
    """Tests for date formatting."""

    def test_format_date(self):
        assert format_date("2025-01-05") == "5 Jan 2025"

    def test_format_date_from_timestamp(self):
        assert format_date("2025-01-05T18:30:00.000Z") == "5 Jan 2025"

    def test_ddmmyyyy(self):
        assert format_date_ddmmyyyy(date(2025, 1, 5)) == "05/01/2025"
        assert format_date_ddmmyyyy(datetime(2025, 12, 31, 23, 0)) == "31/12/2025"

    def test_week_range_across_months(self):
        assert format_week_range("2025-01-27") == "27 Jan - 2 Feb"


class TestMisc:
    """Tests for byte sizes and CSV quoting."""

    @pytest.mark.parametrize("size,expected", [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
    ])
    def test_format_bytes(self, size, expected):
        assert format_bytes(size) == expected

    def test_csv_text_doubles_quotes(self):
        assert csv_text('Stone Chips (1/2")') == '"Stone Chips (1/2"")"'

    def test_csv_text_none(self):
        assert csv_text(None) == '""'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
