# src/eurofx/__init__.py
"""
EuroFX - Bundesbank Daily Exchange Rates

Ingests the Bundesbank's daily EUR reference rates (SDMX-CSV), keeps a
per-currency, per-date rate table and answers point lookups and
currency-to-EUR conversions from it.
"""

__version__ = "1.0.0"
