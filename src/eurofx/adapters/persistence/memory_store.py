# src/eurofx/adapters/persistence/memory_store.py
"""
In-Memory Rate Repository

Thread-safe, process-local implementation of RateRepository. A single lock
makes every check-and-insert atomic, so concurrent refresh workers can never
store the same (currency, date) twice.

Files that USE this module:
- eurofx.app (used when DATABASE_URL is "memory://")
- tests.* (fast repository for service tests)

Files that this module USES:
- eurofx.adapters.persistence.base (RateRepository interface)
- eurofx.shared.validators (currency code normalization)
"""
from __future__ import annotations

import threading
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from eurofx.adapters.persistence.base import RateRepository
from eurofx.domain.models import Currency, RatePoint
from eurofx.shared.validators import normalize_currency_code


class InMemoryRateRepository(RateRepository):
    """Dictionary-backed repository guarded by a lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._currencies: Dict[str, Currency] = {}
        self._rates: Dict[Tuple[str, date], RatePoint] = {}

    def seed_currency(self, code: str, name: str) -> bool:
        code = normalize_currency_code(code)
        with self._lock:
            if code in self._currencies:
                return False
            self._currencies[code] = Currency(code=code, name=name)
            return True

    def has_currency(self, code: str) -> bool:
        with self._lock:
            return normalize_currency_code(code) in self._currencies

    def list_currencies(self) -> List[Currency]:
        with self._lock:
            return sorted(self._currencies.values(), key=lambda c: c.code)

    def exists_for(self, currency_code: str, rate_date: date) -> bool:
        with self._lock:
            return (normalize_currency_code(currency_code), rate_date) in self._rates

    def insert(self, point: RatePoint) -> bool:
        key = (normalize_currency_code(point.currency_code), point.rate_date)
        with self._lock:
            if key in self._rates:
                return False
            self._rates[key] = RatePoint(currency_code=key[0], rate_date=point.rate_date, rate=point.rate)
            return True

    def insert_many(self, points: Iterable[RatePoint]) -> int:
        added = 0
        with self._lock:
            for point in points:
                key = (normalize_currency_code(point.currency_code), point.rate_date)
                if key not in self._rates:
                    self._rates[key] = RatePoint(currency_code=key[0], rate_date=point.rate_date, rate=point.rate)
                    added += 1
        return added

    def find(self, currency_code: str, rate_date: date) -> Optional[RatePoint]:
        with self._lock:
            return self._rates.get((normalize_currency_code(currency_code), rate_date))

    def list_all(self) -> List[RatePoint]:
        with self._lock:
            points = list(self._rates.values())
        points.sort(key=lambda p: p.currency_code)
        points.sort(key=lambda p: p.rate_date, reverse=True)
        return points

    def list_by_date(self, rate_date: date) -> List[RatePoint]:
        with self._lock:
            points = [p for p in self._rates.values() if p.rate_date == rate_date]
        return sorted(points, key=lambda p: p.currency_code)

    def count(self) -> int:
        with self._lock:
            return len(self._rates)
