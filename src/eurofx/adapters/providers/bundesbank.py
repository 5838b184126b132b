# src/eurofx/adapters/providers/bundesbank.py
"""
Bundesbank API Fetcher for Daily EUR Exchange Rates

This module implements the HTTP client for the Deutsche Bundesbank statistics
REST API. Daily EUR reference rates live in the BBEX3 series under the key
D.{CURRENCY}.EUR.BB.AC.000 and are requested as CSV.

Files that USE this module:
- eurofx.app (wires BundesbankFetcher into RatesService)
- tests.test_providers (unit tests)

Files that this module USES:
- eurofx.adapters.providers.base (RateFetcher interface)
- eurofx.config (settings for API configuration)
- eurofx.domain.errors (FetchError)
- eurofx.shared.validators (currency code normalization)
"""
import logging
from typing import Optional

import requests

from eurofx.adapters.providers.base import RateFetcher
from eurofx.config import settings
from eurofx.domain.errors import FetchError
from eurofx.shared.validators import normalize_currency_code

log = logging.getLogger(__name__)

SERIES_KEY_TEMPLATE = "D.{currency}.EUR.BB.AC.000"


class BundesbankFetcher(RateFetcher):
    """Fetches raw SDMX-CSV rate series from the Bundesbank API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        series_id: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Bundesbank API fetcher.
        
        Args:
            base_url: Optional API base URL (defaults to settings.bundesbank_base_url)
            series_id: Optional series identifier (defaults to settings.bundesbank_series_id)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            session: Optional requests session (one is created if omitted)
        """
        self.base_url = (base_url or settings.bundesbank_base_url).rstrip("/")
        self.series_id = series_id or settings.bundesbank_series_id
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session or requests.Session()

    def build_url(self, currency_code: str) -> str:
        """
        Build the series URL for a currency.
        
        Args:
            currency_code: Currency code (normalized before use)
            
        Returns:
            Full URL, e.g. .../BBEX3/D.USD.EUR.BB.AC.000
        """
        key = SERIES_KEY_TEMPLATE.format(currency=normalize_currency_code(currency_code))
        return f"{self.base_url}/{self.series_id}/{key}"

    def fetch(self, currency_code: str) -> str:
        """
        Fetch the raw CSV rate series for a currency.
        
        Args:
            currency_code: ISO currency code (e.g. USD, GBP)
            
        Returns:
            Response body text
            
        Raises:
            FetchError: On timeout, network failure, non-2xx status or empty body
        """
        code = normalize_currency_code(currency_code)
        url = self.build_url(code)
        log.info("Fetching exchange rates for %s from Bundesbank API", code)

        try:
            resp = self.session.get(url, headers={"Accept": "text/csv"}, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            log.warning("Bundesbank API timeout after %d seconds for %s", self.timeout, code)
            raise FetchError(code, f"Bundesbank API timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            log.warning("Bundesbank API request failed for %s: %s", code, e)
            raise FetchError(code, f"Bundesbank API request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            log.error("Bundesbank API returned HTTP %d for %s", resp.status_code, code)
            raise FetchError(
                code,
                f"Bundesbank API returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        body = resp.text
        if not body or not body.strip():
            log.warning("Empty response received from Bundesbank API for %s", code)
            raise FetchError(code, "Bundesbank API returned an empty body", status_code=resp.status_code)

        if log.isEnabledFor(logging.DEBUG):
            log.debug("API response preview for %s: %s", code, body[:500])
        return body

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
