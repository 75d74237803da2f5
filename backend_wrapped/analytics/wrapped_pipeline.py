"""
Wrapped pipeline: validate address -> fetch -> compute insights.

build_wrapped() is the single unit of work behind one user action and raises
WrappedError subclasses. run_wrapped() is the top-level boundary: it turns any
WrappedError into the one alert-style message for the user and never returns
a partial slide list.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping, Protocol

from backend_wrapped.analytics.insight_engine import compute_insights
from backend_wrapped.analytics.models import Insight
from backend_wrapped.analytics.year_window import reference_year, resolve_timezone
from backend_wrapped.core.exceptions import InvalidAddressError, WrappedError
from backend_wrapped.explorer.models import Transaction
from backend_wrapped.wrapped_logging import bind_wallet


class TransactionSource(Protocol):
    def fetch_transactions(
        self, address: str, cancel_event: threading.Event | None = None
    ) -> list[Transaction]: ...


@dataclass(frozen=True)
class WrappedResult:
    address: str
    reference_year: int
    title: str
    insights: list[Insight] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "reference_year": self.reference_year,
            "title": self.title,
            "slides": [
                {"index": i, **insight.to_dict()} for i, insight in enumerate(self.insights)
            ],
        }


@dataclass(frozen=True)
class WrappedOutcome:
    """Either a full result or the single user-facing error message."""

    result: WrappedResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def wrapped_title(year: int) -> str:
    return f"Crypto Wrapped {year}"


def validate_address(address: str | None) -> str:
    """Strip whitespace; blank -> InvalidAddressError."""
    cleaned = (address or "").strip()
    if not cleaned:
        raise InvalidAddressError("wallet address is blank")
    return cleaned


def build_wrapped(
    address: str | None,
    source: TransactionSource,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    images: Mapping[str, str] | None = None,
    cancel_event: threading.Event | None = None,
) -> WrappedResult:
    """
    One user action: validate, fetch, compute. Raises WrappedError subclasses.

    now defaults to the current UTC time viewed in tz.
    """
    wallet = validate_address(address)
    zone = tz or timezone.utc
    reference = now or datetime.now(timezone.utc).astimezone(zone)
    zone = resolve_timezone(reference, tz)
    year = reference_year(reference, zone)

    log = bind_wallet(wallet, __name__)
    log.info("wrapped_start", reference_year=year)
    transactions = source.fetch_transactions(wallet, cancel_event=cancel_event)
    insights = compute_insights(transactions, wallet, reference, tz=zone, images=images)
    log.info("wrapped_done", reference_year=year, slides=len(insights))
    return WrappedResult(address=wallet, reference_year=year, title=wrapped_title(year), insights=insights)


def run_wrapped(
    address: str | None,
    source: TransactionSource,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    images: Mapping[str, str] | None = None,
    cancel_event: threading.Event | None = None,
) -> WrappedOutcome:
    """Top-level boundary: WrappedError -> WrappedOutcome(error=user_message); cause is logged only."""
    try:
        result = build_wrapped(address, source, now=now, tz=tz, images=images, cancel_event=cancel_event)
    except WrappedError as e:
        bind_wallet(address or "", __name__).warning(
            "wrapped_failed",
            error_type=type(e).__name__,
            error=e.detail,
        )
        return WrappedOutcome(error=e.user_message)
    return WrappedOutcome(result=result)
