# src/eurofx/app.py
"""
Application Entry Point - Wiring and Command Line Interface

This module serves as the composition root for EuroFX. It configures
logging, builds the repository, fetcher and services, seeds the currency
catalog and dispatches the command line subcommands.

Usage:
    eurofx refresh [CURRENCY ...]      # fetch and store new rates (all currencies by default)
    eurofx currencies                  # list supported currencies
    eurofx rates [--date YYYY-MM-DD]   # list stored rates
    eurofx rate USD 2024-01-15         # look up one rate
    eurofx convert USD 100 2024-01-15  # convert an amount to EUR

Exit codes:
    0 success; 2 invalid input; 3 refresh finished with failures; 4 not found

Files that USE this module:
- eurofx.__main__ (python -m eurofx)
- the "eurofx" console script (pyproject.toml)

Files that this module USES:
- eurofx.shared.logging_conf (setup_logging for logging configuration)
- eurofx.config (settings and currency catalog)
- eurofx.adapters.* (fetcher, repositories, formatter)
- eurofx.application.* (RatesService, RefreshCoordinator)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import argparse  # Command line parsing
import logging  # Standard library for logging messages and errors
import sys  # Exit codes and output streams
from datetime import date  # Parsing date arguments
from decimal import Decimal, InvalidOperation  # Parsing amount arguments
from typing import List, Optional

from eurofx.adapters.formatting.formatter import (
    format_conversion,
    format_currencies,
    format_rate,
    format_rate_table,
    format_refresh_summary,
)
from eurofx.adapters.persistence.base import RateRepository
from eurofx.adapters.persistence.memory_store import InMemoryRateRepository
from eurofx.adapters.persistence.sql_store import SqlRateRepository
from eurofx.adapters.providers.base import RateFetcher
from eurofx.adapters.providers.bundesbank import BundesbankFetcher
from eurofx.application.rates_service import RatesService
from eurofx.application.refresh_service import RefreshCoordinator
from eurofx.config import load_currency_catalog, settings
from eurofx.domain.errors import NotFoundError, ValidationError
from eurofx.shared.logging_conf import setup_logging

log = logging.getLogger(__name__)

MEMORY_DATABASE_URL = "memory://"

EXIT_OK = 0
EXIT_INVALID_INPUT = 2
EXIT_REFRESH_FAILURES = 3
EXIT_NOT_FOUND = 4


def _parse_date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _parse_amount_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount {value!r}")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser with all subcommands."""
    ap = argparse.ArgumentParser(
        prog="eurofx",
        description="Bundesbank daily EUR exchange rates: refresh, look up and convert.",
    )
    ap.add_argument(
        "--database-url",
        default=None,
        help=f"Override DATABASE_URL ('{MEMORY_DATABASE_URL}' for a throwaway in-memory store)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p_refresh = sub.add_parser("refresh", help="Fetch rates from the Bundesbank and store new ones")
    p_refresh.add_argument("currencies", nargs="*", help="Currency codes (default: all supported)")

    sub.add_parser("currencies", help="List supported currencies")

    p_rates = sub.add_parser("rates", help="List stored rates")
    p_rates.add_argument("--date", type=_parse_date_arg, default=None, help="Only rates of this date")

    p_rate = sub.add_parser("rate", help="Show the rate of a currency on a date")
    p_rate.add_argument("currency")
    p_rate.add_argument("date", type=_parse_date_arg)

    p_convert = sub.add_parser("convert", help="Convert an amount of a currency to EUR")
    p_convert.add_argument("currency")
    p_convert.add_argument("amount", type=_parse_amount_arg)
    p_convert.add_argument("date", type=_parse_date_arg)
    return ap


def build_repository(database_url: Optional[str] = None) -> RateRepository:
    """
    Create the repository for a database URL.

    Args:
        database_url: SQLAlchemy URL, or "memory://" for the in-memory store

    Returns:
        RateRepository implementation
    """
    url = database_url or settings.database_url
    if url == MEMORY_DATABASE_URL:
        return InMemoryRateRepository()
    return SqlRateRepository(database_url=url)


def build_service(repository: RateRepository, fetcher: Optional[RateFetcher] = None) -> RatesService:
    """
    Wire the rates service and seed the currency catalog.

    Args:
        repository: Rate storage
        fetcher: Optional fetcher (a BundesbankFetcher from settings if omitted)

    Returns:
        Ready-to-use RatesService
    """
    coordinator = RefreshCoordinator(
        fetcher=fetcher or BundesbankFetcher(),
        repository=repository,
        max_workers=settings.refresh_max_workers,
    )
    service = RatesService(repository=repository, coordinator=coordinator)
    service.seed_currencies(load_currency_catalog())
    return service


def run_command(service: RatesService, args: argparse.Namespace) -> int:
    """
    Execute a parsed subcommand and print its output.

    Returns:
        Process exit code
    """
    if args.command == "refresh":
        summary = service.refresh(args.currencies or None)
        print(format_refresh_summary(summary))
        return EXIT_REFRESH_FAILURES if summary.has_failures else EXIT_OK

    if args.command == "currencies":
        print(format_currencies(service.list_currencies()))
        return EXIT_OK

    if args.command == "rates":
        points = service.list_by_date(args.date) if args.date else service.list_all()
        print(format_rate_table(points))
        return EXIT_OK

    if args.command == "rate":
        print(format_rate(service.lookup(args.currency, args.date)))
        return EXIT_OK

    if args.command == "convert":
        print(format_conversion(service.convert(args.currency, args.amount, args.date)))
        return EXIT_OK

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, wire dependencies and run the requested command.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    setup_logging(
        level=settings.log_level_value,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_console=settings.log_console,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    repository = build_repository(args.database_url)
    fetcher = BundesbankFetcher()

    try:
        service = build_service(repository, fetcher=fetcher)
        return run_command(service, args)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except NotFoundError as e:
        print(f"not found: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    finally:
        fetcher.close()
        if isinstance(repository, SqlRateRepository):
            repository.dispose()


if __name__ == "__main__":
    sys.exit(main())
