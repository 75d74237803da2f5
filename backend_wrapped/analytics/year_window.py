"""
Trailing calendar-year window.

Keeps transactions at or after January 1 of the previous calendar year,
00:00 local time. There is no upper bound: future-dated entries pass.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Iterable

from backend_wrapped.explorer.models import Transaction


def resolve_timezone(reference_date: datetime, tz: tzinfo | None = None) -> tzinfo:
    """Explicit tz wins; else the reference date's own tz; else UTC."""
    if tz is not None:
        return tz
    if reference_date.tzinfo is not None:
        return reference_date.tzinfo
    return timezone.utc


def reference_year(reference_date: datetime, tz: tzinfo | None = None) -> int:
    """Calendar year of reference_date as seen in tz (naive dates are taken as already local)."""
    if reference_date.tzinfo is None:
        return reference_date.year
    return reference_date.astimezone(resolve_timezone(reference_date, tz)).year


def window_lower_bound(year: int, tz: tzinfo) -> int:
    """Epoch seconds of Jan 1 of (year - 1), 00:00:00 in tz."""
    return int(datetime(year - 1, 1, 1, tzinfo=tz).timestamp())


def filter_year_window(transactions: Iterable[Transaction], year: int, tz: tzinfo) -> list[Transaction]:
    """Order-preserving subsequence with timestamp >= window_lower_bound(year, tz)."""
    lower = window_lower_bound(year, tz)
    return [tx for tx in transactions if tx.timestamp >= lower]
