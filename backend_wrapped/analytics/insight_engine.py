"""
Insight engine: nine statistics plus a closing summary over the trailing-year window.

Pure and stateless: compute_insights(transactions, address, reference_date)
filters to the window, computes each statistic over the same window and
renders one Insight per statistic in a fixed order. No I/O.

Empty windows: count, fees, distinct counterparts, average per day and net
flow are defined (zero). Largest transfer, most active month, success rate and
favorite counterpart have no value and raise UndefinedStatisticError;
compute_insights raises EmptyWindowError before computing anything.

Tie-breaks (ties are real on small wallets, so the rule is explicit):
- largest transfer: first occurrence in window order wins
- most active month: lowest month index wins
- favorite counterpart: first by insertion wins, i.e. the address whose first
  appearance in window order is earliest

Counterparts (`to`) are compared case-sensitively; net flow compares the
sender to the queried address case-insensitively. The asymmetry is kept as is.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from backend_wrapped.analytics.formatting import (
    format_fixed,
    format_plain,
    month_name,
    truncate_address,
    wei_to_eth,
)
from backend_wrapped.analytics.models import (
    KEY_AVERAGE_PER_DAY,
    KEY_DISTINCT_COUNTERPARTS,
    KEY_FAVORITE_COUNTERPART,
    KEY_LARGEST_TRANSFER,
    KEY_MOST_ACTIVE_MONTH,
    KEY_NET_FLOW,
    KEY_SUCCESS_RATE,
    KEY_SUMMARY,
    KEY_TOTAL_FEES,
    KEY_TRANSACTION_COUNT,
    SLIDE_IMAGES,
    CounterpartActivity,
    Insight,
    MonthActivity,
)
from backend_wrapped.analytics.year_window import filter_year_window, reference_year, resolve_timezone
from backend_wrapped.core.exceptions import EmptyWindowError, UndefinedStatisticError
from backend_wrapped.explorer.models import Transaction
from backend_wrapped.wrapped_logging import get_logger, short_wallet

logger = get_logger(__name__)

DAYS_PER_YEAR = 365
SUCCESS_RATE_NAILED_IT = Decimal(95)


# -----------------------------------------------------------------------------
# Statistics
# -----------------------------------------------------------------------------


def transaction_count(window: Sequence[Transaction]) -> int:
    return len(window)


def largest_transfer(window: Sequence[Transaction]) -> Transaction:
    """Transaction with the largest value (wei); first occurrence wins ties."""
    if not window:
        raise UndefinedStatisticError(KEY_LARGEST_TRANSFER)
    best = window[0]
    for tx in window[1:]:
        if tx.value > best.value:
            best = tx
    return best


def month_index_of(timestamp: int, tz: tzinfo) -> int:
    """0-based calendar month of an epoch timestamp in tz."""
    return datetime.fromtimestamp(timestamp, tz).month - 1


def most_active_month(window: Sequence[Transaction], tz: tzinfo) -> MonthActivity:
    """Month with most transactions; scanned in ascending month index so the lowest wins ties."""
    if not window:
        raise UndefinedStatisticError(KEY_MOST_ACTIVE_MONTH)
    counts: dict[int, int] = {}
    for tx in window:
        month = month_index_of(tx.timestamp, tz)
        counts[month] = counts.get(month, 0) + 1
    best_month = -1
    best_count = 0
    for month in sorted(counts):
        if counts[month] > best_count:
            best_month, best_count = month, counts[month]
    return MonthActivity(month_index=best_month, count=best_count)


def total_fees_wei(window: Iterable[Transaction]) -> int:
    """Sum of gasPrice * gasUsed over the window, in wei."""
    return sum((tx.fee_wei for tx in window), 0)


def distinct_counterparts(window: Iterable[Transaction]) -> int:
    """Number of distinct `to` values, exact string match."""
    return len({tx.to_address for tx in window})


def average_per_day(window: Sequence[Transaction]) -> Decimal:
    """count / 365; fixed divisor, no leap-year or elapsed-days adjustment."""
    return Decimal(len(window)) / DAYS_PER_YEAR


def success_rate(window: Sequence[Transaction]) -> Decimal:
    """Percentage (0-100, unrounded) of transactions with isError == "0"."""
    if not window:
        raise UndefinedStatisticError(KEY_SUCCESS_RATE)
    succeeded = sum(1 for tx in window if tx.succeeded)
    return Decimal(100 * succeeded) / Decimal(len(window))


def net_flow_wei(window: Iterable[Transaction], queried_address: str) -> int:
    """Signed wei total: minus when the queried address sent, plus otherwise."""
    me = (queried_address or "").lower()
    total = 0
    for tx in window:
        if tx.from_address.lower() == me:
            total -= tx.value
        else:
            total += tx.value
    return total


def net_flow(window: Iterable[Transaction], queried_address: str) -> Decimal:
    """Net flow in whole ETH (exact)."""
    return wei_to_eth(net_flow_wei(window, queried_address))


def favorite_counterpart(window: Sequence[Transaction]) -> CounterpartActivity:
    """Most frequent `to` value; among ties the one seen first in window order wins."""
    if not window:
        raise UndefinedStatisticError(KEY_FAVORITE_COUNTERPART)
    counts: dict[str, int] = {}
    for tx in window:
        counts[tx.to_address] = counts.get(tx.to_address, 0) + 1
    best_address = ""
    best_count = 0
    # dicts keep insertion order, i.e. first appearance in the window
    for address, count in counts.items():
        if count > best_count:
            best_address, best_count = address, count
    return CounterpartActivity(address=best_address, count=best_count)


# -----------------------------------------------------------------------------
# Slide text
# -----------------------------------------------------------------------------


def _image(key: str, images: Mapping[str, str] | None) -> str:
    source = SLIDE_IMAGES if images is None else images
    return source.get(key, "")


def transaction_count_insight(count: int, images: Mapping[str, str] | None = None) -> Insight:
    return Insight(
        key=KEY_TRANSACTION_COUNT,
        text=f"You made a total of {count} transactions in the past year. What a journey!",
        image=_image(KEY_TRANSACTION_COUNT, images),
        value=count,
    )


def largest_transfer_insight(tx: Transaction, images: Mapping[str, str] | None = None) -> Insight:
    amount = wei_to_eth(tx.value)
    return Insight(
        key=KEY_LARGEST_TRANSFER,
        text=f"Your biggest transaction was {format_plain(amount)} ETH. Whale alert! 🐳",
        image=_image(KEY_LARGEST_TRANSFER, images),
        value=amount,
    )


def most_active_month_insight(activity: MonthActivity, images: Mapping[str, str] | None = None) -> Insight:
    return Insight(
        key=KEY_MOST_ACTIVE_MONTH,
        text=f"You were on fire 🔥 in {month_name(activity.month_index)} with {activity.count} transactions!",
        image=_image(KEY_MOST_ACTIVE_MONTH, images),
        value=activity,
    )


def total_fees_insight(fees_wei: int, images: Mapping[str, str] | None = None) -> Insight:
    fees = wei_to_eth(fees_wei)
    return Insight(
        key=KEY_TOTAL_FEES,
        text=f"You spent a whopping {format_fixed(fees, 4)} ETH on gas fees. Ouch! 💸",
        image=_image(KEY_TOTAL_FEES, images),
        value=fees,
    )


def distinct_counterparts_insight(count: int, images: Mapping[str, str] | None = None) -> Insight:
    return Insight(
        key=KEY_DISTINCT_COUNTERPARTS,
        text=f"You interacted with {count} unique smart contracts. Diversification at its finest! 🌈",
        image=_image(KEY_DISTINCT_COUNTERPARTS, images),
        value=count,
    )


def average_per_day_insight(avg: Decimal, images: Mapping[str, str] | None = None) -> Insight:
    return Insight(
        key=KEY_AVERAGE_PER_DAY,
        text=f"On average, you made {format_fixed(avg, 2)} transactions per day. Crypto never sleeps! 😴",
        image=_image(KEY_AVERAGE_PER_DAY, images),
        value=avg,
    )


def success_rate_insight(rate: Decimal, images: Mapping[str, str] | None = None) -> Insight:
    # threshold is checked on the unrounded rate, not the 2-decimal display
    verdict = "Nailed it! 🎯" if rate > SUCCESS_RATE_NAILED_IT else "Room for improvement! 🎓"
    return Insight(
        key=KEY_SUCCESS_RATE,
        text=f"Your transaction success rate was {format_fixed(rate, 2)}%. {verdict}",
        image=_image(KEY_SUCCESS_RATE, images),
        value=rate,
    )


def net_flow_insight(flow: Decimal, images: Mapping[str, str] | None = None) -> Insight:
    verdict = "You're in the green! 💚" if flow > 0 else "Keep HODLing! 💎🙌"
    return Insight(
        key=KEY_NET_FLOW,
        text=f"Your net ETH flow for the year: {format_fixed(flow, 4)} ETH. {verdict}",
        image=_image(KEY_NET_FLOW, images),
        value=flow,
    )


def favorite_counterpart_insight(activity: CounterpartActivity, images: Mapping[str, str] | None = None) -> Insight:
    return Insight(
        key=KEY_FAVORITE_COUNTERPART,
        text=(
            f"Your favorite address was {truncate_address(activity.address)}. "
            f"You interacted with it {activity.count} times! 💕"
        ),
        image=_image(KEY_FAVORITE_COUNTERPART, images),
        value=activity,
    )


def summary_insight(
    count: int,
    fees_wei: int,
    counterparts: int,
    flow: Decimal,
    month: MonthActivity,
    images: Mapping[str, str] | None = None,
) -> Insight:
    """Restates already computed values; computes nothing of its own."""
    text = (
        f"In summary, your crypto year was a rollercoaster! You made {count} transactions, "
        f"spent {format_fixed(wei_to_eth(fees_wei), 4)} ETH on gas, and interacted with "
        f"{counterparts} different contracts. Your net ETH flow was {format_fixed(flow, 4)} ETH, "
        f"and you were most active in {month_name(month.month_index)}. Keep on crypto-ing! 🚀"
    )
    return Insight(key=KEY_SUMMARY, text=text, image=_image(KEY_SUMMARY, images))


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------


def insights_for_window(
    window: Sequence[Transaction],
    queried_address: str,
    tz: tzinfo,
    images: Mapping[str, str] | None = None,
) -> list[Insight]:
    """Render the ten slides for an already filtered, non-empty window."""
    if not window:
        raise EmptyWindowError()

    count = transaction_count(window)
    biggest = largest_transfer(window)
    month = most_active_month(window, tz)
    fees = total_fees_wei(window)
    counterparts = distinct_counterparts(window)
    avg = average_per_day(window)
    rate = success_rate(window)
    flow = net_flow(window, queried_address)
    favorite = favorite_counterpart(window)

    return [
        transaction_count_insight(count, images),
        largest_transfer_insight(biggest, images),
        most_active_month_insight(month, images),
        total_fees_insight(fees, images),
        distinct_counterparts_insight(counterparts, images),
        average_per_day_insight(avg, images),
        success_rate_insight(rate, images),
        net_flow_insight(flow, images),
        favorite_counterpart_insight(favorite, images),
        summary_insight(count, fees, counterparts, flow, month, images),
    ]


def compute_insights(
    transactions: Iterable[Transaction],
    queried_address: str,
    reference_date: datetime,
    tz: tzinfo | None = None,
    images: Mapping[str, str] | None = None,
) -> list[Insight]:
    """
    Filter to the trailing-year window relative to reference_date and render
    the ten slides (nine statistics, then the summary).

    tz is the "local" zone for the window start and month grouping; defaults
    to reference_date's tzinfo, then UTC. Raises EmptyWindowError when no
    transaction falls inside the window.
    """
    zone = resolve_timezone(reference_date, tz)
    year = reference_year(reference_date, zone)
    window = filter_year_window(transactions, year, zone)
    if not window:
        logger.info("insights_empty_window", wallet=short_wallet(queried_address), reference_year=year)
        raise EmptyWindowError()
    insights = insights_for_window(window, queried_address, zone, images)
    logger.info(
        "insights_computed",
        wallet=short_wallet(queried_address),
        reference_year=year,
        tx_count=len(window),
        slides=len(insights),
    )
    return insights
