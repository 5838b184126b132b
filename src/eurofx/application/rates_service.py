# src/eurofx/application/rates_service.py
"""
Rates Service - Business Logic for Exchange Rate Operations

This module contains the caller-facing operations of the system: seeding
the currency catalog, refreshing rates from upstream, looking up a stored
rate and converting an amount to EUR. All caller input is validated here;
invalid input raises ValidationError and missing data raises a NotFoundError
subclass.

Files that USE this module:
- eurofx.app (CLI commands call RatesService)
- tests.test_rates_service (unit tests)

Files that this module USES:
- eurofx.adapters.persistence.base (RateRepository interface)
- eurofx.application.refresh_service (RefreshCoordinator)
- eurofx.application.conversion (convert)
- eurofx.shared.validators (caller input validation)
"""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, List, Mapping, Optional

from eurofx.adapters.persistence.base import RateRepository
from eurofx.application.conversion import convert as convert_to_eur
from eurofx.application.refresh_service import RefreshCoordinator
from eurofx.domain.errors import CurrencyNotFoundError, RateNotFoundError
from eurofx.domain.models import ConversionResult, Currency, RatePoint, RefreshSummary
from eurofx.shared.validators import (
    normalize_currency_code,
    validate_amount,
    validate_currency_code,
    validate_rate_date,
)

log = logging.getLogger(__name__)


class RatesService:
    """
    High-level service over the rate repository.
    The refresh coordinator is optional; a read-only service has none.
    """

    def __init__(
        self,
        repository: RateRepository,
        coordinator: Optional[RefreshCoordinator] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize rates service.
        
        Args:
            repository: Rate storage
            coordinator: Optional refresh coordinator (required for refresh())
            today: Clock used to reject future dates
        """
        self.repository = repository
        self.coordinator = coordinator
        self._today = today

    # --- Currency catalog ---

    def seed_currencies(self, catalog: Mapping[str, str]) -> int:
        """
        Add catalog currencies that are not stored yet.
        
        Args:
            catalog: Currency code -> name
            
        Returns:
            Number of currencies added
        """
        log.info("Initializing currency data")
        added = 0
        for code, name in catalog.items():
            if self.repository.seed_currency(validate_currency_code(code), name):
                log.debug("Added currency: %s - %s", code, name)
                added += 1
        log.info("Currency initialization completed (%d added)", added)
        return added

    def list_currencies(self) -> List[Currency]:
        return self.repository.list_currencies()

    def is_supported(self, currency_code: Optional[str]) -> bool:
        code = normalize_currency_code(currency_code)
        return bool(code) and self.repository.has_currency(code)

    # --- Refresh ---

    def refresh(self, currencies: Optional[Iterable[str]] = None) -> RefreshSummary:
        """
        Refresh rates from upstream.
        
        Args:
            currencies: Currency codes to refresh (defaults to the whole catalog)
            
        Returns:
            RefreshSummary of the run
        """
        if self.coordinator is None:
            raise RuntimeError("RatesService was created without a refresh coordinator")
        if currencies is None:
            currencies = [c.code for c in self.repository.list_currencies()]
        return self.coordinator.refresh(currencies)

    # --- Queries ---

    def _require_currency(self, currency_code: Optional[str]) -> str:
        code = validate_currency_code(currency_code)
        if not self.is_supported(code):
            raise CurrencyNotFoundError(code)
        return code

    def lookup(self, currency_code: Optional[str], rate_date: Optional[date]) -> RatePoint:
        """
        Get the stored rate of a currency on a date.
        
        Raises:
            ValidationError: Blank/malformed code, missing or future date
            CurrencyNotFoundError: Currency not in the catalog
            RateNotFoundError: No rate stored for that date
        """
        code = self._require_currency(currency_code)
        validate_rate_date(rate_date, self._today())
        log.debug("Fetching exchange rate for %s on %s", code, rate_date)

        point = self.repository.find(code, rate_date)
        if point is None:
            raise RateNotFoundError(code, rate_date)
        return point

    def convert(
        self,
        currency_code: Optional[str],
        amount: Optional[Decimal],
        rate_date: Optional[date],
    ) -> ConversionResult:
        """
        Convert an amount of a foreign currency to EUR using the rate of a date.
        
        Raises:
            ValidationError: Invalid code, date or non-positive amount
            CurrencyNotFoundError: Currency not in the catalog
            RateNotFoundError: No rate stored for that date
        """
        code = self._require_currency(currency_code)
        validate_rate_date(rate_date, self._today())
        validate_amount(amount)
        log.debug("Converting %s %s to EUR for date %s", amount, code, rate_date)

        point = self.repository.find(code, rate_date)
        if point is None:
            raise RateNotFoundError(code, rate_date)

        return ConversionResult(
            source_currency=code,
            source_amount=amount,
            converted_amount=convert_to_eur(amount, point.rate),
            rate_used=point.rate,
            rate_date=point.rate_date,
        )

    def list_all(self) -> List[RatePoint]:
        """All stored rates, newest first."""
        return self.repository.list_all()

    def list_by_date(self, rate_date: Optional[date]) -> List[RatePoint]:
        """
        All stored rates of a date.
        
        Raises:
            ValidationError: Missing or future date
        """
        validate_rate_date(rate_date, self._today())
        return self.repository.list_by_date(rate_date)
