from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def try_parse_iso_date(value: Any) -> Optional[date]:
    """Like parse_iso_date but returns None for anything that is not a real calendar date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    v = value.strip()[:10]
    if not _ISO_DATE.match(v):
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        return None


def to_iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
