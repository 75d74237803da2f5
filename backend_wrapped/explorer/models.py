"""
Data models for explorer output.

Transaction is the strict schema at the fetcher/engine boundary: numeric text
fields from the explorer (timeStamp, value, gasPrice, gasUsed) are parsed to
integers once here, so the insight engine never re-parses strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from backend_wrapped.core.exceptions import InvalidTransactionError
from backend_wrapped.wrapped_logging import get_logger

logger = get_logger(__name__)

SUCCESS_FLAG = "0"


def _parse_uint(item: dict[str, Any], key: str, default: int | None = None) -> int:
    raw = item.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if default is not None:
            return default
        raise InvalidTransactionError(f"missing {key}")
    if isinstance(raw, bool):
        raise InvalidTransactionError(f"{key} is not an integer: {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        try:
            value = int(text, 16) if text.lower().startswith("0x") else int(text)
        except ValueError:
            raise InvalidTransactionError(f"{key} is not an integer: {raw!r}") from None
    if value < 0:
        raise InvalidTransactionError(f"{key} is negative: {raw!r}")
    return value


def _parse_address(item: dict[str, Any], key: str, required: bool) -> str:
    raw = item.get(key)
    if raw is None:
        if required:
            raise InvalidTransactionError(f"missing {key}")
        return ""
    if not isinstance(raw, str):
        raise InvalidTransactionError(f"{key} is not a string: {raw!r}")
    return raw.strip()


@dataclass(frozen=True)
class Transaction:
    """
    One normal (external) transaction from Etherscan account/txlist.

    Amounts are integers in wei (1 ETH = 10**18 wei). to_address is "" for
    contract creations. is_error keeps the explorer's string flag; "0" is success.
    """

    timestamp: int
    from_address: str
    to_address: str
    value: int
    gas_price: int
    gas_used: int
    is_error: str
    hash: str | None = None
    block_number: int | None = None

    @property
    def fee_wei(self) -> int:
        return self.gas_price * self.gas_used

    @property
    def succeeded(self) -> bool:
        return self.is_error == SUCCESS_FLAG

    @classmethod
    def from_explorer_item(cls, item: dict[str, Any]) -> "Transaction":
        """Build from a single txlist result item. Raises InvalidTransactionError."""
        if not isinstance(item, dict):
            raise InvalidTransactionError(f"transaction record is not an object: {type(item).__name__}")
        is_error = item.get("isError")
        block = item.get("blockNumber")
        return cls(
            timestamp=_parse_uint(item, "timeStamp"),
            from_address=_parse_address(item, "from", required=True),
            to_address=_parse_address(item, "to", required=False),
            value=_parse_uint(item, "value"),
            gas_price=_parse_uint(item, "gasPrice", default=0),
            gas_used=_parse_uint(item, "gasUsed", default=0),
            is_error=SUCCESS_FLAG if is_error is None else str(is_error).strip(),
            hash=item.get("hash") or None,
            block_number=_parse_uint(item, "blockNumber") if block not in (None, "") else None,
        )


def parse_transactions(items: Iterable[Any], strict: bool = False) -> list[Transaction]:
    """
    Convert raw explorer records to Transactions, preserving order.

    strict=False: malformed records are logged (transaction_skipped) and dropped.
    strict=True: the first malformed record raises InvalidTransactionError.
    """
    out: list[Transaction] = []
    skipped = 0
    for index, item in enumerate(items):
        try:
            out.append(Transaction.from_explorer_item(item))
        except InvalidTransactionError as e:
            if strict:
                raise
            skipped += 1
            tx_hash = item.get("hash") if isinstance(item, dict) else None
            logger.warning("transaction_skipped", index=index, hash=tx_hash, error=str(e))
    if skipped:
        logger.info("transactions_parsed", parsed=len(out), skipped=skipped)
    return out
