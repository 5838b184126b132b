# src/eurofx/adapters/formatting/formatter.py
"""
Output Formatter - Text Formatting and Presentation

This module handles all plain-text formatting for command line output:
single rates, rate tables, conversion results, currency lists and refresh
summaries.

Files that USE this module:
- eurofx.app (CLI commands print formatter output)
- tests.test_formatter (unit tests)

Files that this module USES:
- eurofx.domain.models (RatePoint, ConversionResult, Currency, RefreshSummary)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from eurofx.domain.models import ConversionResult, Currency, RatePoint, RefreshSummary


def _fmt_decimal(value: Decimal) -> str:
    """
    Format a decimal without exponent notation.
    
    Args:
        value: Decimal to format
        
    Returns:
        Plain string, e.g. Decimal("1E+2") -> "100"
    """
    return format(value, "f")


def format_rate(point: RatePoint) -> str:
    """
    Format a single stored rate.
    
    Args:
        point: Rate point to format
        
    Returns:
        Line like "2024-01-15  1 EUR = 1.0850 USD"
    """
    return f"{point.rate_date.isoformat()}  1 EUR = {_fmt_decimal(point.rate)} {point.currency_code}"


def format_rate_table(points: Iterable[RatePoint]) -> str:
    """
    Format rates as an aligned table (date, currency, rate).
    
    Args:
        points: Rate points in display order
        
    Returns:
        Multi-line table, or "No exchange rates found." if empty
    """
    rows = [(p.rate_date.isoformat(), p.currency_code, _fmt_decimal(p.rate)) for p in points]
    if not rows:
        return "No exchange rates found."
    
    rate_width = max(len("RATE"), max(len(r[2]) for r in rows))
    lines = [f"{'DATE':<10}  {'CCY':<3}  {'RATE':>{rate_width}}"]
    for rate_date, code, rate in rows:
        lines.append(f"{rate_date:<10}  {code:<3}  {rate:>{rate_width}}")
    return "\n".join(lines)


def format_conversion(result: ConversionResult) -> str:
    """
    Format a conversion result.
    
    Returns:
        Two lines: the converted amount and the rate that was applied
    """
    return (
        f"{_fmt_decimal(result.source_amount)} {result.source_currency} = "
        f"{_fmt_decimal(result.converted_amount)} {result.target_currency}\n"
        f"— rate on {result.rate_date.isoformat()}: "
        f"1 {result.target_currency} = {_fmt_decimal(result.rate_used)} {result.source_currency}"
    )


def format_currencies(currencies: Iterable[Currency]) -> str:
    lines = [f"{c.code}  {c.name}" for c in currencies]
    return "\n".join(lines) if lines else "No currencies configured."


def format_refresh_summary(summary: RefreshSummary) -> str:
    """
    Format the outcome of a refresh run.
    
    Args:
        summary: RefreshSummary to format
        
    Returns:
        Totals line followed by one line per failed currency
    """
    lines: List[str] = [
        f"Refreshed {len(summary.succeeded)}/{len(summary.currencies)} currencies, "
        f"added {summary.added_count} new rates."
    ]
    for code in sorted(summary.per_currency_failures):
        lines.append(f"— {code}: FAILED ({summary.per_currency_failures[code]})")
    return "\n".join(lines)
