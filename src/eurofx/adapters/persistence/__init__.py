# src/eurofx/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting rates:
- In-memory storage (tests, throwaway runs)
- Relational storage via SQLAlchemy
"""

from eurofx.adapters.persistence.base import RateRepository
from eurofx.adapters.persistence.memory_store import InMemoryRateRepository
from eurofx.adapters.persistence.sql_store import SqlRateRepository, create_db_engine

__all__ = [
    "RateRepository",
    "InMemoryRateRepository",
    "SqlRateRepository",
    "create_db_engine",
]
