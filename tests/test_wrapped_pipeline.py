"""
Tests for the wrapped pipeline and its single error boundary (run_wrapped).
"""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from backend_wrapped.analytics.wrapped_pipeline import build_wrapped, run_wrapped, validate_address
from backend_wrapped.core.exceptions import (
    MSG_EMPTY_WINDOW,
    MSG_ENTER_ADDRESS,
    MSG_FETCH_FAILED,
    FetchCancelledError,
    InvalidAddressError,
)
from backend_wrapped.wrapped_logging import short_wallet
from conftest import ONE_ETH, REFERENCE_DATE, WALLET, ts


def test_validate_address_strips_and_rejects_blank():
    assert validate_address(f"  {WALLET}\n") == WALLET
    for blank in ("", "   ", None):
        with pytest.raises(InvalidAddressError):
            validate_address(blank)


def test_blank_address_never_fetches(fake_source):
    """Input validation happens before any fetch starts."""
    source = fake_source()
    outcome = run_wrapped("   ", source, now=REFERENCE_DATE)
    assert outcome.ok is False
    assert outcome.error == MSG_ENTER_ADDRESS
    assert source.calls == []


def test_build_wrapped_success(fake_source, make_tx):
    """Ten slides, title from the reference year, address stripped before fetching."""
    source = fake_source([make_tx(value=ONE_ETH), make_tx(timestamp=ts(2025, 4, 1), value=2 * ONE_ETH)])
    result = build_wrapped(f" {WALLET} ", source, now=REFERENCE_DATE)

    assert source.calls == [WALLET]
    assert result.address == WALLET
    assert result.reference_year == 2025
    assert result.title == "Crypto Wrapped 2025"
    assert len(result.insights) == 10

    payload = result.to_dict()
    assert [s["index"] for s in payload["slides"]] == list(range(10))
    assert payload["slides"][0]["key"] == "transaction_count"
    assert payload["slides"][-1]["key"] == "summary"


def test_fetch_failure_collapses_to_generic_message(failing_source):
    """Any upstream failure -> one generic message, no slides."""
    outcome = run_wrapped(WALLET, failing_source, now=REFERENCE_DATE)
    assert outcome.ok is False
    assert outcome.result is None
    assert outcome.error == MSG_FETCH_FAILED


def test_cancellation_collapses_to_generic_message(fake_source):
    source = fake_source(error=FetchCancelledError("explorer fetch cancelled"))
    outcome = run_wrapped(WALLET, source, now=REFERENCE_DATE)
    assert outcome.error == MSG_FETCH_FAILED


def test_empty_window_reported_not_partial(fake_source, make_tx):
    """Only pre-window history: explicit message instead of a crash or partial slides."""
    source = fake_source([make_tx(timestamp=ts(2022, 1, 1), value=ONE_ETH)])
    outcome = run_wrapped(WALLET, source, now=REFERENCE_DATE)
    assert outcome.ok is False
    assert outcome.error == MSG_EMPTY_WINDOW


def test_unexpected_errors_propagate(fake_source):
    """Programming errors are not disguised as fetch failures."""
    source = fake_source(error=KeyError("boom"))
    with pytest.raises(KeyError):
        run_wrapped(WALLET, source, now=REFERENCE_DATE)


def test_default_now_uses_current_year(fake_source, make_tx):
    """Without `now`, the reference year is the current one; yesterday is always in the window."""
    import time
    from datetime import datetime, timezone

    source = fake_source([make_tx(timestamp=int(time.time()) - 86400)])
    result = build_wrapped(WALLET, source)
    assert result.reference_year == datetime.now(timezone.utc).year


def test_failure_log_carries_wallet_and_cause(failing_source):
    """The boundary logs the underlying cause with the shortened wallet; the user sees only the message."""
    with capture_logs() as logs:
        outcome = run_wrapped(WALLET, failing_source, now=REFERENCE_DATE)

    assert outcome.error == MSG_FETCH_FAILED
    failed = [entry for entry in logs if entry["event"] == "wrapped_failed"]
    assert len(failed) == 1
    assert failed[0]["wallet"] == short_wallet(WALLET)
    assert failed[0]["error_type"] == "FetchError"
    assert "NOTOK" in failed[0]["error"]
    assert "NOTOK" not in outcome.error
