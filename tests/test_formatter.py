# tests/test_formatter.py
"""
Formatter Tests - Unit Tests for Output Formatting

This module contains unit tests for the plain-text formatters used by the
command line: single rates, rate tables, conversions, currency lists and
refresh summaries.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- eurofx.adapters.formatting.formatter (formatting functions)
- eurofx.domain.models (RatePoint, ConversionResult, Currency, RefreshSummary)
"""
from datetime import date  # Rate dates
from decimal import Decimal  # Exact values

from eurofx.adapters.formatting.formatter import (
    format_conversion,
    format_currencies,
    format_rate,
    format_rate_table,
    format_refresh_summary,
)
from eurofx.domain.models import ConversionResult, Currency, RatePoint, RefreshSummary


class TestFormatRate:
    def test_format_rate(self):
        point = RatePoint("USD", date(2024, 1, 15), Decimal("1.0850"))

        assert format_rate(point) == "2024-01-15  1 EUR = 1.0850 USD"

    def test_no_exponent_notation(self):
        point = RatePoint("JPY", date(2024, 1, 15), Decimal("1E+2"))

        assert format_rate(point) == "2024-01-15  1 EUR = 100 JPY"


class TestFormatRateTable:
    def test_empty(self):
        assert format_rate_table([]) == "No exchange rates found."

    def test_rows_keep_order_and_align_rates(self):
        table = format_rate_table([
            RatePoint("USD", date(2024, 1, 17), Decimal("1.0900")),
            RatePoint("JPY", date(2024, 1, 15), Decimal("160.12")),
        ])

        lines = table.split("\n")
        assert lines[0] == "DATE        CCY    RATE"
        assert lines[1] == "2024-01-17  USD  1.0900"
        assert lines[2] == "2024-01-15  JPY  160.12"

    def test_accepts_generator(self):
        points = (RatePoint("GBP", date(2024, 1, 15), Decimal("0.8560")) for _ in range(2))

        assert len(format_rate_table(points).split("\n")) == 3


class TestFormatConversion:
    def test_format_conversion(self):
        result = ConversionResult(
            source_currency="USD",
            source_amount=Decimal("100.00"),
            converted_amount=Decimal("92.1659"),
            rate_used=Decimal("1.0850"),
            rate_date=date(2024, 1, 15),
        )

        text = format_conversion(result)

        first, second = text.split("\n")
        assert first == "100.00 USD = 92.1659 EUR"
        assert "2024-01-15" in second
        assert "1 EUR = 1.0850 USD" in second


class TestFormatCurrencies:
    def test_lists_codes_and_names(self):
        text = format_currencies([Currency("GBP", "British Pound Sterling"), Currency("USD", "US Dollar")])

        assert text == "GBP  British Pound Sterling\nUSD  US Dollar"

    def test_empty(self):
        assert format_currencies([]) == "No currencies configured."


class TestFormatRefreshSummary:
    def test_all_succeeded(self):
        summary = RefreshSummary(
            added_count=5,
            per_currency_added={"USD": 3, "GBP": 2},
            currencies=frozenset({"USD", "GBP"}),
        )

        assert format_refresh_summary(summary) == "Refreshed 2/2 currencies, added 5 new rates."

    def test_failures_listed_sorted(self):
        summary = RefreshSummary(
            added_count=1,
            per_currency_failures={"USD": "Bundesbank API returned HTTP 503", "CHF": "Currency not found: CHF"},
            per_currency_added={"USD": 0, "CHF": 0, "JPY": 1},
            currencies=frozenset({"USD", "CHF", "JPY"}),
        )

        lines = format_refresh_summary(summary).split("\n")

        assert lines[0] == "Refreshed 1/3 currencies, added 1 new rates."
        assert "CHF: FAILED (Currency not found: CHF)" in lines[1]
        assert "USD: FAILED (Bundesbank API returned HTTP 503)" in lines[2]
