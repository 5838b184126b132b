# src/eurofx/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (Bundesbank API)
- Parsing (SDMX-CSV responses)
- Persistence (storage)
- Formatting (output)
"""

__all__ = []
