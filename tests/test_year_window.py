"""
Tests for the trailing-year window filter.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from backend_wrapped.analytics.year_window import (
    filter_year_window,
    reference_year,
    resolve_timezone,
    window_lower_bound,
)
from conftest import REFERENCE_DATE, ts

UTC = ZoneInfo("UTC")


def test_lower_bound_is_jan_first_of_previous_year():
    """2025 -> 2024-01-01T00:00:00 local."""
    assert window_lower_bound(2025, UTC) == 1704067200
    assert window_lower_bound(2025, ZoneInfo("Asia/Tokyo")) == 1704067200 - 9 * 3600


def test_filter_boundary_inclusive(make_tx):
    """timestamp == lower bound passes; one second earlier does not."""
    at = make_tx(timestamp=1704067200, hash="at")
    before = make_tx(timestamp=1704067199, hash="before")
    assert filter_year_window([before, at], 2025, UTC) == [at]


def test_filter_has_no_upper_bound(make_tx):
    """Future-dated transactions are kept: the cutoff is single-sided."""
    future = make_tx(timestamp=ts(2030, 1, 1), hash="future")
    assert filter_year_window([future], 2025, UTC) == [future]


def test_filter_is_order_preserving_subsequence(make_tx):
    """Output keeps input order, drops only pre-window items, and never duplicates."""
    txs = [
        make_tx(timestamp=ts(2025, 5, 1), hash="a"),
        make_tx(timestamp=ts(2022, 5, 1), hash="b"),
        make_tx(timestamp=ts(2024, 1, 2), hash="c"),
        make_tx(timestamp=ts(2023, 12, 31), hash="d"),
        make_tx(timestamp=ts(2024, 11, 30), hash="e"),
    ]
    out = filter_year_window(txs, 2025, UTC)
    assert [tx.hash for tx in out] == ["a", "c", "e"]
    lower = window_lower_bound(2025, UTC)
    assert all(tx.timestamp >= lower for tx in out)
    assert [tx for tx in txs if tx.timestamp >= lower] == out


def test_filter_empty_input():
    assert filter_year_window([], 2025, UTC) == []


def test_filter_local_timezone_shifts_cutoff(make_tx):
    """2023-12-31 16:00 UTC is already 2024-01-01 in Tokyo."""
    tx = make_tx(timestamp=ts(2023, 12, 31, 16, 0))
    assert filter_year_window([tx], 2025, UTC) == []
    assert filter_year_window([tx], 2025, ZoneInfo("Asia/Tokyo")) == [tx]


def test_reference_year_and_timezone_resolution():
    """Aware dates are read in the resolved tz; naive dates use their own year."""
    new_year_utc = datetime(2025, 1, 1, 3, 0, tzinfo=timezone.utc)
    assert reference_year(new_year_utc, ZoneInfo("America/Los_Angeles")) == 2024
    assert reference_year(new_year_utc) == 2025
    assert reference_year(datetime(2026, 3, 1)) == 2026
    assert resolve_timezone(datetime(2026, 3, 1)) is timezone.utc
    assert resolve_timezone(REFERENCE_DATE) is timezone.utc
    assert resolve_timezone(REFERENCE_DATE, UTC) is UTC
