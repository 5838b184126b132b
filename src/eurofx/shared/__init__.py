# src/eurofx/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from eurofx.shared.validators import (
    normalize_currency_code,
    validate_amount,
    validate_currency_code,
    validate_http_url,
    validate_rate_date,
)
from eurofx.shared.logging_conf import setup_logging

__all__ = [
    "normalize_currency_code",
    "validate_currency_code",
    "validate_rate_date",
    "validate_amount",
    "validate_http_url",
    "setup_logging",
]
