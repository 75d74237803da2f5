"""
Pytest fixtures for Crypto Wrapped tests: transaction factories, a fixed
reference date, and a fake explorer source so nothing hits the network.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from backend_wrapped.core.exceptions import FetchError
from backend_wrapped.explorer.models import Transaction

WALLET = "0x9aB1c0FfEe00000000000000000000000000dEaD"
OTHER = "0x1111111111111111111111111111111111111111"
ONE_ETH = 10**18

# Window for this reference date starts 2024-01-01T00:00:00Z
REFERENCE_DATE = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def ts(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    """UTC epoch seconds."""
    return int(datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def make_tx():
    """Factory for Transaction with sensible defaults (inside the 2024-2025 window, success)."""

    def _make(
        timestamp: int | None = None,
        from_address: str = OTHER,
        to_address: str = WALLET,
        value: int = 0,
        gas_price: int = 0,
        gas_used: int = 0,
        is_error: str = "0",
        hash: str | None = None,
    ) -> Transaction:
        return Transaction(
            timestamp=ts(2024, 3, 5) if timestamp is None else timestamp,
            from_address=from_address,
            to_address=to_address,
            value=value,
            gas_price=gas_price,
            gas_used=gas_used,
            is_error=is_error,
            hash=hash,
        )

    return _make


@pytest.fixture
def raw_item():
    """Factory for an Etherscan txlist result item (all values as text)."""

    def _make(**overrides) -> dict:
        item = {
            "blockNumber": "19000000",
            "timeStamp": str(ts(2024, 3, 5)),
            "hash": "0xabc",
            "from": OTHER,
            "to": WALLET,
            "value": str(ONE_ETH),
            "gas": "21000",
            "gasPrice": "2",
            "gasUsed": "21000",
            "isError": "0",
            "txreceipt_status": "1",
        }
        item.update(overrides)
        return item

    return _make


class FakeSource:
    """Stands in for EtherscanClient: returns fixed transactions or raises."""

    def __init__(self, transactions=None, error: Exception | None = None) -> None:
        self.transactions = list(transactions or [])
        self.error = error
        self.calls: list[str] = []

    def fetch_transactions(self, address, cancel_event=None):
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return list(self.transactions)


@pytest.fixture
def fake_source():
    """Factory for FakeSource."""
    return FakeSource


@pytest.fixture
def failing_source():
    return FakeSource(error=FetchError("explorer status '0': NOTOK"))
