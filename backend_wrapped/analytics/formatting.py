"""
Number and address formatting for slide text.

Amounts stay Decimal end to end (wei -> ETH is an exact scale by 10**-18);
fixed-place output rounds half-up.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

WEI_PER_ETH = 10**18
ETH_DECIMALS = 18

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ADDRESS_HEAD = 6
ADDRESS_TAIL = 4
ELLIPSIS = "..."


def wei_to_eth(wei: int) -> Decimal:
    """Exact conversion: 1 ETH = 10**18 wei."""
    return Decimal(wei).scaleb(-ETH_DECIMALS)


def format_fixed(amount: Decimal, places: int) -> str:
    """Fixed number of decimals, half-up. Exact zero never renders as -0."""
    quantum = Decimal(1).scaleb(-places)
    q = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    if q == 0 and amount == 0:
        q = q.copy_abs()
    return format(q, "f")


def format_plain(amount: Decimal) -> str:
    """Shortest plain rendering: no exponent, no trailing zeros (1.500 -> 1.5, 2.0 -> 2)."""
    if amount == 0:
        return "0"
    return format(amount.normalize(), "f")


def truncate_address(address: str) -> str:
    """First 6 chars + '...' + last 4 chars: 0x1234567890abcdef -> 0x1234...cdef."""
    return f"{address[:ADDRESS_HEAD]}{ELLIPSIS}{address[-ADDRESS_TAIL:]}"


def month_name(month_index: int) -> str:
    """0-based month index to English name."""
    return MONTH_NAMES[month_index]
