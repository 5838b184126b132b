# src/eurofx/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from eurofx.domain.models import (
    EUR,
    ConversionResult,
    Currency,
    RatePoint,
    RateSeries,
    RefreshSummary,
)
from eurofx.domain.errors import (
    CurrencyNotFoundError,
    DomainError,
    FetchError,
    NotFoundError,
    RateNotFoundError,
    ValidationError,
)

__all__ = [
    "EUR",
    "Currency",
    "RatePoint",
    "RateSeries",
    "ConversionResult",
    "RefreshSummary",
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "CurrencyNotFoundError",
    "RateNotFoundError",
    "FetchError",
]
