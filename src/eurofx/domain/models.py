# src/eurofx/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Supported currencies
- Daily exchange rate points (foreign units per 1 EUR)
- Conversion results
- Refresh outcomes

Files that USE this module:
- eurofx.application.* (all services use domain models)
- eurofx.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import date  # Calendar dates for rate observations
from decimal import Decimal  # Exact decimal arithmetic for rates and amounts
from typing import Dict, FrozenSet

# Date-ordered mapping of observation date to rate for a single currency
RateSeries = Dict[date, Decimal]

EUR = "EUR"


@dataclass(frozen=True)
class Currency:
    """A supported currency from the catalog."""
    code: str
    name: str


@dataclass(frozen=True)
class RatePoint:
    """
    Exchange rate of one currency on one day.
    
    Attributes:
        currency_code: Normalized 3-letter currency code
        rate_date: Observation date
        rate: Units of foreign currency per 1 EUR (always > 0)
    """
    currency_code: str
    rate_date: date
    rate: Decimal


@dataclass(frozen=True)
class ConversionResult:
    """
    Result of converting a foreign currency amount to EUR.
    
    Attributes:
        source_currency: Currency the amount is expressed in
        source_amount: Amount that was converted
        converted_amount: Amount in EUR (4 decimal places)
        rate_used: Stored rate applied for the conversion
        rate_date: Date of the rate
        target_currency: Always "EUR"
    """
    source_currency: str
    source_amount: Decimal
    converted_amount: Decimal
    rate_used: Decimal
    rate_date: date
    target_currency: str = EUR


@dataclass(frozen=True)
class RefreshSummary:
    """
    Outcome of one refresh run across currencies.
    
    Attributes:
        added_count: Number of new rate points stored
        per_currency_failures: Currency code -> failure message
        per_currency_added: Currency code -> number of new points stored
        currencies: Normalized currency codes that were processed
    """
    added_count: int = 0
    per_currency_failures: Dict[str, str] = field(default_factory=dict)
    per_currency_added: Dict[str, int] = field(default_factory=dict)
    currencies: FrozenSet[str] = frozenset()

    @property
    def succeeded(self) -> FrozenSet[str]:
        """Currencies that were refreshed without failure."""
        return frozenset(c for c in self.currencies if c not in self.per_currency_failures)

    @property
    def has_failures(self) -> bool:
        return bool(self.per_currency_failures)
