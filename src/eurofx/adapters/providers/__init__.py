# src/eurofx/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains fetchers for upstream exchange rate sources.
All fetchers implement the RateFetcher interface.
"""

from eurofx.adapters.providers.base import RateFetcher
from eurofx.adapters.providers.bundesbank import BundesbankFetcher

__all__ = [
    "RateFetcher",
    "BundesbankFetcher",
]
