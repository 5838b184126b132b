# tests/test_refresh_service.py
"""
Refresh Service Tests - Unit Tests for RefreshCoordinator

This module contains unit tests for the refresh/reconciliation flow:
idempotent storage, per-currency failure isolation, invalid currency codes
and the bounded worker pool.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- eurofx.application.refresh_service (RefreshCoordinator)
- eurofx.adapters.persistence.memory_store (InMemoryRateRepository)
- eurofx.adapters.providers.base (RateFetcher interface for stub fetchers)
- unittest.mock (Mock for repository failures)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

import threading  # Barrier for concurrent fetch checks
from datetime import date  # Expected observation dates
from decimal import Decimal  # Expected exact rate values
from unittest.mock import Mock  # Mock objects for failing collaborators

from eurofx.adapters.persistence.memory_store import InMemoryRateRepository
from eurofx.adapters.providers.base import RateFetcher
from eurofx.application.refresh_service import RefreshCoordinator
from eurofx.domain.errors import FetchError


RESPONSES = {
    "USD": "TIME_PERIOD,OBS_VALUE\n2024-01-15,1.0850\n2024-01-16,.\n2024-01-17,1.0900\n",
    "GBP": "TIME_PERIOD;OBS_VALUE\n2024-01-15;0.8560\n2024-01-17;0.8571\n",
    "JPY": "TIME_PERIOD,OBS_VALUE\n2024-01-15,160.12\n",
}


class StubFetcher(RateFetcher):
    """Serves canned responses; currencies listed in `failing` raise FetchError."""

    def __init__(self, responses, failing=()):
        self.responses = dict(responses)
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def fetch(self, currency_code: str) -> str:
        with self._lock:
            self.calls.append(currency_code)
        if currency_code in self.failing:
            raise FetchError(currency_code, "Bundesbank API returned HTTP 503", status_code=503)
        return self.responses.get(currency_code, "")


@pytest.fixture
def repository():
    repo = InMemoryRateRepository()
    for code, name in [("USD", "US Dollar"), ("GBP", "British Pound Sterling"), ("JPY", "Japanese Yen")]:
        repo.seed_currency(code, name)
    return repo


class TestRefresh:
    def test_stores_parsed_points(self, repository):
        coordinator = RefreshCoordinator(StubFetcher(RESPONSES), repository, max_workers=1)

        summary = coordinator.refresh(["USD", "GBP", "JPY"])

        assert summary.added_count == 5
        assert summary.per_currency_failures == {}
        assert summary.per_currency_added == {"USD": 2, "GBP": 2, "JPY": 1}
        assert summary.succeeded == {"USD", "GBP", "JPY"}
        assert repository.find("USD", date(2024, 1, 15)).rate == Decimal("1.0850")
        assert repository.find("USD", date(2024, 1, 16)) is None

    def test_refresh_is_idempotent(self, repository):
        coordinator = RefreshCoordinator(StubFetcher(RESPONSES), repository, max_workers=1)

        first = coordinator.refresh(["USD", "GBP", "JPY"])
        count_after_first = repository.count()
        second = coordinator.refresh(["USD", "GBP", "JPY"])

        assert first.added_count == 5
        assert second.added_count == 0
        assert repository.count() == count_after_first == 5

    def test_existing_rates_are_never_overwritten(self, repository):
        RefreshCoordinator(StubFetcher(RESPONSES), repository, max_workers=1).refresh(["USD"])
        revised = {"USD": "TIME_PERIOD,OBS_VALUE\n2024-01-15,9.9999\n2024-01-18,1.0950\n"}

        summary = RefreshCoordinator(StubFetcher(revised), repository, max_workers=1).refresh(["USD"])

        assert summary.added_count == 1
        assert repository.find("USD", date(2024, 1, 15)).rate == Decimal("1.0850")
        assert repository.find("USD", date(2024, 1, 18)).rate == Decimal("1.0950")

    def test_codes_are_normalized_and_deduplicated(self, repository):
        fetcher = StubFetcher(RESPONSES)
        coordinator = RefreshCoordinator(fetcher, repository, max_workers=1)

        summary = coordinator.refresh([" usd", "USD", "Usd "])

        assert fetcher.calls == ["USD"]
        assert summary.currencies == {"USD"}
        assert summary.added_count == 2

    def test_empty_currency_list(self, repository):
        summary = RefreshCoordinator(StubFetcher(RESPONSES), repository).refresh([])

        assert summary.added_count == 0
        assert summary.currencies == frozenset()
        assert not summary.has_failures


class TestFailureIsolation:
    def test_fetch_failure_does_not_stop_other_currencies(self, repository):
        coordinator = RefreshCoordinator(StubFetcher(RESPONSES, failing={"GBP"}), repository, max_workers=1)

        summary = coordinator.refresh(["USD", "GBP", "JPY"])

        assert summary.added_count == 3
        assert set(summary.per_currency_failures) == {"GBP"}
        assert "503" in summary.per_currency_failures["GBP"]
        assert summary.succeeded == {"USD", "JPY"}
        assert repository.find("JPY", date(2024, 1, 15)) is not None

    def test_unknown_currency_is_reported(self, repository):
        fetcher = StubFetcher(RESPONSES)
        coordinator = RefreshCoordinator(fetcher, repository, max_workers=1)

        summary = coordinator.refresh(["USD", "CHF"])

        assert "CHF" in summary.per_currency_failures
        assert "Currency not found" in summary.per_currency_failures["CHF"]
        assert "CHF" not in fetcher.calls
        assert summary.per_currency_added["USD"] == 2

    @pytest.mark.parametrize("code", ["", "US", "DOLLAR"])
    def test_invalid_code_is_reported(self, repository, code):
        summary = RefreshCoordinator(StubFetcher(RESPONSES), repository, max_workers=1).refresh([code, "JPY"])

        assert code in summary.per_currency_failures
        assert summary.added_count == 1

    def test_unexpected_fetcher_error_is_isolated(self, repository):
        def fetch(code):
            if code == "USD":
                raise ValueError("boom")
            return RESPONSES[code]

        fetcher = Mock(spec=RateFetcher)
        fetcher.fetch.side_effect = fetch
        coordinator = RefreshCoordinator(fetcher, repository, max_workers=1)

        summary = coordinator.refresh(["USD", "JPY"])

        assert summary.per_currency_failures == {"USD": "ValueError: boom"}
        assert summary.added_count == 1

    def test_storage_failure_is_isolated(self, repository):
        real_insert_many = repository.insert_many

        def flaky_insert_many(points):
            points = list(points)
            if points and points[0].currency_code == "GBP":
                raise RuntimeError("database is locked")
            return real_insert_many(points)

        repository.insert_many = flaky_insert_many
        coordinator = RefreshCoordinator(StubFetcher(RESPONSES), repository, max_workers=1)

        summary = coordinator.refresh(["USD", "GBP"])

        assert "database is locked" in summary.per_currency_failures["GBP"]
        assert summary.per_currency_added == {"USD": 2, "GBP": 0}

    def test_unparseable_response_adds_nothing_without_failing(self, repository):
        fetcher = StubFetcher({"USD": "<html>maintenance</html>"})

        summary = RefreshCoordinator(fetcher, repository, max_workers=1).refresh(["USD"])

        assert summary.added_count == 0
        assert summary.per_currency_failures == {}


class TestConcurrency:
    def test_worker_pool_runs_currencies_concurrently(self, repository):
        barrier = threading.Barrier(3, timeout=5)

        class BarrierFetcher(StubFetcher):
            def fetch(self, currency_code):
                # Only passes if all three fetches are in flight at once
                barrier.wait()
                return super().fetch(currency_code)

        coordinator = RefreshCoordinator(BarrierFetcher(RESPONSES), repository, max_workers=3)

        summary = coordinator.refresh(["USD", "GBP", "JPY"])

        assert summary.added_count == 5
        assert summary.per_currency_failures == {}

    def test_concurrent_refreshes_never_duplicate(self, repository):
        coordinator = RefreshCoordinator(StubFetcher(RESPONSES), repository, max_workers=3)
        results = []

        def run():
            results.append(coordinator.refresh(["USD", "GBP", "JPY"]).added_count)

        threads = [threading.Thread(target=run) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(results) == 5
        assert repository.count() == 5

    def test_failure_in_one_worker_does_not_cancel_others(self, repository):
        coordinator = RefreshCoordinator(StubFetcher(RESPONSES, failing={"USD"}), repository, max_workers=3)

        summary = coordinator.refresh(["USD", "GBP", "JPY"])

        assert set(summary.per_currency_failures) == {"USD"}
        assert summary.per_currency_added == {"USD": 0, "GBP": 2, "JPY": 1}
