# src/eurofx/adapters/parsing/__init__.py
"""
Parsing Adapters - Upstream Response Parsing

This package turns raw upstream response text into domain rate series.
"""

from eurofx.adapters.parsing.sdmx_csv import (
    ParseReport,
    RateTextParser,
    parse_period,
    parse_rates,
)

__all__ = [
    "ParseReport",
    "RateTextParser",
    "parse_period",
    "parse_rates",
]
