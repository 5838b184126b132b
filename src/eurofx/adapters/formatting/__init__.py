# src/eurofx/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Formatting

This package contains formatters for presenting rates and refresh results.
"""

from eurofx.adapters.formatting.formatter import (
    format_conversion,
    format_currencies,
    format_rate,
    format_rate_table,
    format_refresh_summary,
)

__all__ = [
    "format_rate",
    "format_rate_table",
    "format_conversion",
    "format_currencies",
    "format_refresh_summary",
]
