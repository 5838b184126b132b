# src/eurofx/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
No direct I/O dependencies - uses adapters through interfaces.
"""

from eurofx.application.conversion import convert
from eurofx.application.refresh_service import RefreshCoordinator
from eurofx.application.rates_service import RatesService

__all__ = [
    "convert",
    "RefreshCoordinator",
    "RatesService",
]
