"""
Data models for insight output.

Insight is one slide: rendered text plus an opaque image tag. key and value
identify the statistic behind the text for API clients and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

KEY_TRANSACTION_COUNT = "transaction_count"
KEY_LARGEST_TRANSFER = "largest_transfer"
KEY_MOST_ACTIVE_MONTH = "most_active_month"
KEY_TOTAL_FEES = "total_fees"
KEY_DISTINCT_COUNTERPARTS = "distinct_counterparts"
KEY_AVERAGE_PER_DAY = "average_per_day"
KEY_SUCCESS_RATE = "success_rate"
KEY_NET_FLOW = "net_flow"
KEY_FAVORITE_COUNTERPART = "favorite_counterpart"
KEY_SUMMARY = "summary"

# Slide order; the reveal builds towards the summary so it is fixed.
INSIGHT_ORDER = (
    KEY_TRANSACTION_COUNT,
    KEY_LARGEST_TRANSFER,
    KEY_MOST_ACTIVE_MONTH,
    KEY_TOTAL_FEES,
    KEY_DISTINCT_COUNTERPARTS,
    KEY_AVERAGE_PER_DAY,
    KEY_SUCCESS_RATE,
    KEY_NET_FLOW,
    KEY_FAVORITE_COUNTERPART,
    KEY_SUMMARY,
)

SLIDE_IMAGES: dict[str, str] = {
    KEY_TRANSACTION_COUNT: "slides/journey.gif",
    KEY_LARGEST_TRANSFER: "slides/whale.gif",
    KEY_MOST_ACTIVE_MONTH: "slides/fire.gif",
    KEY_TOTAL_FEES: "slides/gas.gif",
    KEY_DISTINCT_COUNTERPARTS: "slides/rainbow.gif",
    KEY_AVERAGE_PER_DAY: "slides/sleep.gif",
    KEY_SUCCESS_RATE: "slides/target.gif",
    KEY_NET_FLOW: "slides/diamond-hands.gif",
    KEY_FAVORITE_COUNTERPART: "slides/heart.gif",
    KEY_SUMMARY: "slides/rocket.gif",
}


@dataclass(frozen=True)
class Insight:
    key: str
    text: str
    image: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "text": self.text, "image": self.image}


@dataclass(frozen=True)
class MonthActivity:
    """Most active month: 0-based index and transaction count."""

    month_index: int
    count: int


@dataclass(frozen=True)
class CounterpartActivity:
    """Most frequent `to` address and how often it appears."""

    address: str
    count: int
