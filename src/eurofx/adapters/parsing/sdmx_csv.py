# src/eurofx/adapters/parsing/sdmx_csv.py
"""
SDMX-CSV Rate Parser - Tolerant Parsing of Bundesbank Responses

This module turns the raw text of a Bundesbank time-series response into a
date-ordered series of rates for one currency. The responses are CSV, but
loosely so: metadata lines precede the header, the delimiter is either
comma or semicolon, observations can be daily, monthly or yearly, and gaps
are published as sentinel values instead of being left out.

Parsing is best-effort and never raises for bad input: lines that cannot be
used are counted and dropped.

Files that USE this module:
- eurofx.application.refresh_service (RefreshCoordinator parses fetched text)
- tests.test_parser (unit tests)

Files that this module USES:
- eurofx.domain.models (RateSeries type)
"""
from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from eurofx.domain.models import RateSeries

log = logging.getLogger(__name__)

TIME_PERIOD = "TIME_PERIOD"
OBS_VALUE = "OBS_VALUE"

# "No observation" markers, compared after stripping and uppercasing
MISSING_VALUE_MARKERS = frozenset({"", ".", "-", "NAN"})

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_DAY_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_MONTH_RE = re.compile(r"([0-9]{4})-([0-9]{2})")
_YEAR_RE = re.compile(r"([0-9]{4})")
# Plain decimal literal; Decimal() alone would also take "1_085" or "Infinity"
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_QUOTE_CHARS = "\"'"


@dataclass
class ParseReport:
    """
    Result of parsing one response, with counters for every dropped line.

    Attributes:
        series: Date-ordered rates that survived validation
        header_found: Whether a TIME_PERIOD/OBS_VALUE header line was seen
        sentinel: Rows whose value was a "not available" marker
        bad_date: Rows whose date could not be parsed
        bad_value: Rows whose value was not a finite decimal
        non_positive: Rows whose rate was zero or negative
        short_row: Rows with too few fields to reach both columns
    """
    series: RateSeries = field(default_factory=dict)
    header_found: bool = False
    sentinel: int = 0
    bad_date: int = 0
    bad_value: int = 0
    non_positive: int = 0
    short_row: int = 0

    @property
    def skipped(self) -> int:
        return self.sentinel + self.bad_date + self.bad_value + self.non_positive + self.short_row


def clean_field(raw: str) -> str:
    """Strip whitespace and surrounding quote characters from a field."""
    return raw.strip().strip(_QUOTE_CHARS).strip()


def parse_period(text: str) -> Optional[date]:
    """
    Parse an SDMX time period into a calendar date.

    Accepts daily (YYYY-MM-DD), monthly (YYYY-MM, first of month) and
    yearly (YYYY, January 1st) periods.

    Args:
        text: Cleaned period string

    Returns:
        Date, or None if the period has any other shape or is not a real date
    """
    try:
        m = _DAY_RE.fullmatch(text)
        if m:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        m = _MONTH_RE.fullmatch(text)
        if m:
            return date(int(m.group(1)), int(m.group(2)), 1)
        m = _YEAR_RE.fullmatch(text)
        if m:
            return date(int(m.group(1)), 1, 1)
    except ValueError:
        # e.g. 2024-02-30, 2024-13, 0000
        return None
    return None


def parse_rate_value(text: str) -> Optional[Decimal]:
    """
    Parse an observation value as an exact decimal.

    Returns:
        Decimal value, or None if malformed or not finite
    """
    if not _DECIMAL_RE.fullmatch(text):
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def _split_fields(line: str, delimiter: str) -> List[str]:
    try:
        return next(csv.reader([line], delimiter=delimiter), [])
    except csv.Error:
        return line.split(delimiter)


class RateTextParser:
    """
    Parser for Bundesbank SDMX-CSV exchange rate responses.

    The delimiter defaults to comma and switches to semicolon, for the rest
    of the response, as soon as a line containing a semicolon is seen. The
    first line that names both TIME_PERIOD and OBS_VALUE fixes the column
    positions; everything before it is metadata.
    """

    def parse(self, raw_text: Optional[str]) -> RateSeries:
        """
        Parse response text into a date-ordered rate series.

        Args:
            raw_text: Raw response body (may be None or empty)

        Returns:
            Mapping of date to rate, ascending by date (empty if nothing usable)
        """
        return self.parse_report(raw_text).series

    def parse_report(self, raw_text: Optional[str]) -> ParseReport:
        """
        Parse response text and report what was dropped and why.

        Args:
            raw_text: Raw response body (may be None or empty)

        Returns:
            ParseReport holding the series and skip counters
        """
        report = ParseReport()
        if raw_text is None or not raw_text.strip():
            log.debug("Empty response text, nothing to parse")
            return report

        delimiter = ","
        time_index = -1
        value_index = -1
        series: RateSeries = {}

        for line in _LINE_SPLIT_RE.split(raw_text):
            if not line.strip():
                continue

            if ";" in line:
                delimiter = ";"

            fields = _split_fields(line, delimiter)

            if not report.header_found:
                names = [clean_field(f).upper() for f in fields]
                if TIME_PERIOD in names and OBS_VALUE in names:
                    time_index = names.index(TIME_PERIOD)
                    value_index = names.index(OBS_VALUE)
                    report.header_found = True
                # Header or metadata line, never data
                continue

            if len(fields) <= max(time_index, value_index):
                report.short_row += 1
                continue

            period_text = clean_field(fields[time_index])
            value_text = clean_field(fields[value_index])

            if value_text.upper() in MISSING_VALUE_MARKERS:
                report.sentinel += 1
                continue

            rate_date = parse_period(period_text)
            if rate_date is None:
                report.bad_date += 1
                log.debug("Skipping line with unparseable date: %r", line)
                continue

            rate = parse_rate_value(value_text)
            if rate is None:
                report.bad_value += 1
                log.debug("Skipping line with invalid rate value: %r", line)
                continue

            if rate <= 0:
                report.non_positive += 1
                continue

            # Later occurrences of the same date win
            series[rate_date] = rate

        if not report.header_found:
            log.warning("No TIME_PERIOD/OBS_VALUE header found in response, nothing parsed")

        report.series = dict(sorted(series.items()))
        log.debug(
            "Parsed %d exchange rate entries (skipped: sentinel=%d, bad_date=%d, "
            "bad_value=%d, non_positive=%d, short_row=%d)",
            len(report.series), report.sentinel, report.bad_date,
            report.bad_value, report.non_positive, report.short_row,
        )
        return report


def parse_rates(raw_text: Optional[str]) -> RateSeries:
    """Parse response text with a default RateTextParser."""
    return RateTextParser().parse(raw_text)
