# src/eurofx/adapters/providers/base.py
"""
Base Fetcher Interface for Exchange Rate Sources

This module defines the abstract base class for all rate fetchers.
It establishes the contract that all fetcher implementations must follow.

Files that USE this module:
- eurofx.adapters.providers.bundesbank (BundesbankFetcher implements RateFetcher)
- eurofx.application.refresh_service (RefreshCoordinator depends on RateFetcher)
- tests.* (tests provide stub fetchers)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod


class RateFetcher(ABC):
    @abstractmethod
    def fetch(self, currency_code: str) -> str:
        """
        Return the raw response text of the rate series for a currency.

        Raises:
            FetchError: If the series cannot be retrieved
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the fetcher."""
