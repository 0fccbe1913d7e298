"""Datetime parsing helpers for ingestion payloads."""

from __future__ import annotations

import re
from datetime import date

_LEADING_YEAR_RE = re.compile(r"^\s*(\d{4})(?!\d)")


def parse_date(value: str | None) -> date | None:
    """Parse YYYY, YYYY-MM, or YYYY-MM-DD strings into dates."""
    if not value:
        return None
    value = value.strip()
    try:
        if len(value) == 4:
            return date.fromisoformat(f"{value}-01-01")
        if len(value) == 7:
            return date.fromisoformat(f"{value}-01")
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_year(value: str | None) -> int | None:
    """Extract the leading four-digit year from a date string.

    Independent of ``parse_date``: ``"2021-13-40"`` still yields 2021.
    """
    if not value:
        return None
    match = _LEADING_YEAR_RE.match(value)
    if not match:
        return None
    return int(match.group(1))
