# src/eurofx/shared/validators.py
"""
Input Validation Utilities - Caller Input Validation

This module provides the validation and normalization functions applied to
everything callers hand in: currency codes, dates and amounts. Violations
raise ValidationError so callers can tell "bad request" from "no data".

Files that USE this module:
- eurofx.config.settings (validate_http_url in Settings field validators)
- eurofx.application.rates_service (validates lookup/convert arguments)
- eurofx.application.refresh_service (normalizes currency codes)
- eurofx.adapters.persistence.* (normalizes currency keys)

Files that this module USES:
- eurofx.domain.errors (ValidationError)
"""
from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Optional

from eurofx.domain.errors import ValidationError

_CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")


def normalize_currency_code(code: Optional[str]) -> str:
    """
    Trim and uppercase a currency code.
    
    Args:
        code: Raw currency code (may be None)
        
    Returns:
        Normalized code, or empty string for None
    """
    if code is None:
        return ""
    return code.strip().upper()


def validate_currency_code(code: Optional[str]) -> str:
    """
    Normalize a currency code and check its shape.
    
    Args:
        code: Raw currency code from the caller
        
    Returns:
        Normalized 3-letter code
        
    Raises:
        ValidationError: If the code is missing, blank or not 3 letters
    """
    normalized = normalize_currency_code(code)
    if not normalized:
        raise ValidationError("Currency code cannot be null or empty")
    if not _CURRENCY_CODE_RE.match(normalized):
        raise ValidationError(f"Invalid currency code: {code!r}")
    return normalized


def validate_rate_date(value: Optional[date], today: Optional[date] = None) -> date:
    """
    Check that a requested date is present and not in the future.
    
    Args:
        value: Requested date
        today: Reference date (defaults to date.today())
        
    Returns:
        The validated date
        
    Raises:
        ValidationError: If the date is missing or after today
    """
    if value is None:
        raise ValidationError("Date cannot be null")
    if value > (today or date.today()):
        raise ValidationError("Cannot request exchange rates for future dates")
    return value


def validate_amount(amount: Optional[Decimal]) -> Decimal:
    """
    Check that an amount is present and strictly positive.
    
    Raises:
        ValidationError: If the amount is missing, not finite or <= 0
    """
    if amount is None:
        raise ValidationError("Amount cannot be null")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    return amount


def validate_http_url(url: str) -> bool:
    """
    Validate an http(s) URL.
    
    Args:
        url: URL to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not url:
        return False
    return bool(re.match(r"^https?://[^\s/$.?#].[^\s]*$", url))
