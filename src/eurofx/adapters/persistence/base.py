# src/eurofx/adapters/persistence/base.py
"""
Rate Repository Interface - Storage Contract

This module defines the storage contract used by the application layer.
Rates are keyed by (currency code, date); a stored rate is never
overwritten, so every write is an insert-if-absent that must be atomic
under concurrent writers.

Files that USE this module:
- eurofx.adapters.persistence.memory_store (InMemoryRateRepository)
- eurofx.adapters.persistence.sql_store (SqlRateRepository)
- eurofx.application.* (services depend on RateRepository)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from eurofx.domain.models import Currency, RatePoint


class RateRepository(ABC):
    """Storage for the currency catalog and daily rate points."""

    # --- Currency catalog ---

    @abstractmethod
    def seed_currency(self, code: str, name: str) -> bool:
        """Add a currency if absent. Returns True if it was added."""
        raise NotImplementedError

    @abstractmethod
    def has_currency(self, code: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list_currencies(self) -> List[Currency]:
        """All currencies ordered by code."""
        raise NotImplementedError

    # --- Rates ---

    @abstractmethod
    def exists_for(self, currency_code: str, rate_date: date) -> bool:
        raise NotImplementedError

    @abstractmethod
    def insert(self, point: RatePoint) -> bool:
        """
        Store a rate point unless one exists for its (currency, date).

        Returns:
            True if the point was inserted, False if it was already present
        """
        raise NotImplementedError

    def insert_many(self, points: Iterable[RatePoint]) -> int:
        """
        Insert-if-absent for several points.

        Returns:
            Number of points actually inserted
        """
        return sum(1 for point in points if self.insert(point))

    @abstractmethod
    def find(self, currency_code: str, rate_date: date) -> Optional[RatePoint]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[RatePoint]:
        """All rate points, newest date first, then by currency code."""
        raise NotImplementedError

    @abstractmethod
    def list_by_date(self, rate_date: date) -> List[RatePoint]:
        """Rate points of one date ordered by currency code."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError
