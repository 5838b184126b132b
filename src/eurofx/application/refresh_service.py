# src/eurofx/application/refresh_service.py
"""
Refresh Coordinator - Reconcile Upstream Rates into Storage

This module drives a refresh across currencies: for each one it fetches the
raw series, parses it and stores every point that is not stored yet.
Currencies are independent; a failure for one is recorded in the summary
and never stops the others. Running a refresh twice with the same upstream
data adds nothing the second time.

Files that USE this module:
- eurofx.application.rates_service (RatesService.refresh delegates here)
- tests.test_refresh_service (unit tests)

Files that this module USES:
- eurofx.adapters.providers.base (RateFetcher interface)
- eurofx.adapters.parsing.sdmx_csv (RateTextParser)
- eurofx.adapters.persistence.base (RateRepository interface)
- eurofx.domain.models (RatePoint, RefreshSummary)
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Tuple

from eurofx.adapters.parsing.sdmx_csv import RateTextParser
from eurofx.adapters.persistence.base import RateRepository
from eurofx.adapters.providers.base import RateFetcher
from eurofx.config import settings
from eurofx.domain.errors import CurrencyNotFoundError, DomainError, FetchError
from eurofx.domain.models import RatePoint, RefreshSummary
from eurofx.shared.validators import validate_currency_code

log = logging.getLogger(__name__)


class RefreshCoordinator:
    """Runs fetch -> parse -> store for each currency with failure isolation."""

    def __init__(
        self,
        fetcher: RateFetcher,
        repository: RateRepository,
        parser: Optional[RateTextParser] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize the coordinator.
        
        Args:
            fetcher: Source of raw rate series
            repository: Rate storage
            parser: Optional parser (a default RateTextParser if omitted)
            max_workers: Optional worker pool size (defaults to settings.refresh_max_workers)
        """
        self.fetcher = fetcher
        self.repository = repository
        self.parser = parser or RateTextParser()
        self.max_workers = max(1, max_workers or settings.refresh_max_workers)

    def refresh_currency(self, currency_code: str) -> int:
        """
        Refresh a single currency.
        
        Args:
            currency_code: Normalized currency code known to the repository
            
        Returns:
            Number of new rate points stored
            
        Raises:
            CurrencyNotFoundError: If the currency is not in the catalog
            FetchError: If the upstream series cannot be fetched
            Exception: Storage errors propagate to the caller
        """
        if not self.repository.has_currency(currency_code):
            raise CurrencyNotFoundError(currency_code)

        text = self.fetcher.fetch(currency_code)
        report = self.parser.parse_report(text)
        if report.skipped:
            log.info(
                "%s: skipped %d lines (sentinel=%d, bad_date=%d, bad_value=%d, non_positive=%d, short_row=%d)",
                currency_code, report.skipped, report.sentinel, report.bad_date,
                report.bad_value, report.non_positive, report.short_row,
            )

        points = [
            RatePoint(currency_code=currency_code, rate_date=rate_date, rate=rate)
            for rate_date, rate in report.series.items()
        ]
        added = self.repository.insert_many(points)
        log.info("%s: parsed %d rates, added %d new", currency_code, len(points), added)
        return added

    def _run_one(self, currency_code: str) -> Tuple[int, Optional[str]]:
        try:
            return self.refresh_currency(currency_code), None
        except FetchError as e:
            log.warning("Failed to fetch rates for %s: %s", currency_code, e)
            return 0, str(e)
        except DomainError as e:
            log.warning("Skipping %s: %s", currency_code, e)
            return 0, str(e)
        except Exception as e:
            log.error("Failed to refresh rates for %s: %s", currency_code, e, exc_info=True)
            return 0, f"{type(e).__name__}: {e}"

    def refresh(self, currencies: Iterable[str]) -> RefreshSummary:
        """
        Refresh all given currencies.
        
        Invalid codes are reported as failures, duplicates (after
        normalization) are processed once.
        
        Args:
            currencies: Currency codes to refresh
            
        Returns:
            RefreshSummary with the number of added points and per-currency failures
        """
        failures: Dict[str, str] = {}
        codes: List[str] = []
        for raw in currencies:
            try:
                code = validate_currency_code(raw)
            except DomainError as e:
                failures[str(raw)] = str(e)
                continue
            if code not in codes:
                codes.append(code)

        log.info("Starting exchange rate refresh for %d currencies", len(codes))

        if self.max_workers == 1 or len(codes) <= 1:
            outcomes = [self._run_one(code) for code in codes]
        else:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(codes))) as pool:
                outcomes = list(pool.map(self._run_one, codes))

        per_currency_added: Dict[str, int] = {}
        for code, (added, error) in zip(codes, outcomes):
            per_currency_added[code] = added
            if error is not None:
                failures[code] = error

        summary = RefreshSummary(
            added_count=sum(per_currency_added.values()),
            per_currency_failures=failures,
            per_currency_added=per_currency_added,
            currencies=frozenset(codes),
        )
        log.info(
            "Exchange rate refresh completed. Added %d new rates, %d currencies failed.",
            summary.added_count, len(failures),
        )
        return summary
