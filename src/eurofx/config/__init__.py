# src/eurofx/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings
and the read-only catalog of supported currencies.
"""

from eurofx.config.settings import Settings, settings
from eurofx.config.currencies import load_currency_catalog

__all__ = ["Settings", "settings", "load_currency_catalog"]
