# src/eurofx/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors.

Files that USE this module:
- eurofx.shared.validators (raises ValidationError)
- eurofx.application.* (services raise and catch these errors)
- eurofx.adapters.providers.bundesbank (raises FetchError)
- eurofx.app (maps errors to exit codes)
"""
from __future__ import annotations

from datetime import date
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class ValidationError(DomainError):
    """Raised when caller input is invalid (blank currency, future date, non-positive amount)."""
    pass


class NotFoundError(DomainError):
    """Raised when requested data does not exist."""
    pass


class CurrencyNotFoundError(NotFoundError):
    """Raised when a currency code is not in the supported catalog."""

    def __init__(self, currency_code: str):
        self.currency_code = currency_code
        super().__init__(f"Currency not found: {currency_code}")


class RateNotFoundError(NotFoundError):
    """Raised when no rate is stored for a currency on a date."""

    def __init__(self, currency_code: str, rate_date: date):
        self.currency_code = currency_code
        self.rate_date = rate_date
        super().__init__(
            f"Exchange rate not found for {currency_code} on {rate_date.isoformat()}"
        )


class FetchError(DomainError):
    """Raised when rates for a currency cannot be fetched from upstream."""

    def __init__(self, currency_code: str, message: str, status_code: Optional[int] = None):
        self.currency_code = currency_code
        self.status_code = status_code
        super().__init__(message)
