# src/eurofx/config/currencies.py
"""
Supported Currency Catalog

The currencies published in the Bundesbank daily EUR reference rate series.
The catalog is read-only; it is loaded once at startup and handed to
RatesService.seed_currencies by the composition root.

Files that USE this module:
- eurofx.app (loads the catalog and seeds the repository)
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_SUPPORTED_CURRENCIES = (
    ("USD", "US Dollar"),
    ("JPY", "Japanese Yen"),
    ("GBP", "British Pound Sterling"),
    ("CHF", "Swiss Franc"),
    ("AUD", "Australian Dollar"),
    ("CAD", "Canadian Dollar"),
    ("SEK", "Swedish Krona"),
    ("NOK", "Norwegian Krone"),
    ("DKK", "Danish Krone"),
    ("NZD", "New Zealand Dollar"),
    ("PLN", "Polish Zloty"),
    ("HUF", "Hungarian Forint"),
    ("CZK", "Czech Koruna"),
    ("TRY", "Turkish Lira"),
    ("ZAR", "South African Rand"),
    ("MXN", "Mexican Peso"),
    ("BRL", "Brazilian Real"),
    ("CNY", "Chinese Yuan Renminbi"),
    ("INR", "Indian Rupee"),
    ("KRW", "South Korean Won"),
    ("SGD", "Singapore Dollar"),
    ("HKD", "Hong Kong Dollar"),
    ("THB", "Thai Baht"),
    ("MYR", "Malaysian Ringgit"),
    ("PHP", "Philippine Peso"),
    ("IDR", "Indonesian Rupiah"),
)


def load_currency_catalog() -> Mapping[str, str]:
    """
    Build the immutable code -> name catalog of supported currencies.
    
    Returns:
        Read-only mapping in publication order
    """
    return MappingProxyType(dict(_SUPPORTED_CURRENCIES))
