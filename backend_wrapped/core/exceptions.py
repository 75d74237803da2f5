"""
Application-level exceptions.

Every failure a user action can hit is a WrappedError carrying the one
user-facing message shown for it; the underlying cause is only logged.
"""

from __future__ import annotations

MSG_ENTER_ADDRESS = "Please enter a wallet address."
MSG_FETCH_FAILED = "Failed to fetch wallet data. Please try again."
MSG_EMPTY_WINDOW = "No transactions found for this wallet in the past year."
MSG_INVALID_DATA = MSG_FETCH_FAILED


class WrappedError(Exception):
    """Base class; user_message is what the UI/API surfaces."""

    user_message = MSG_FETCH_FAILED

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail or self.user_message


class InvalidAddressError(WrappedError, ValueError):
    """Blank or missing wallet address; raised before any fetch starts."""

    user_message = MSG_ENTER_ADDRESS


class FetchError(WrappedError):
    """Explorer returned a non-success status, an HTTP error, or the transport failed."""

    user_message = MSG_FETCH_FAILED


class FetchCancelledError(FetchError):
    """The caller's cancellation token was set while fetching."""


class InvalidTransactionError(WrappedError, ValueError):
    """A raw explorer record could not be coerced to the Transaction schema."""

    user_message = MSG_INVALID_DATA


class EmptyWindowError(WrappedError):
    """No transactions fall inside the trailing-year window."""

    user_message = MSG_EMPTY_WINDOW


class UndefinedStatisticError(EmptyWindowError):
    """A statistic with no value on an empty window (max, mode, rate) was requested."""

    def __init__(self, statistic: str) -> None:
        super().__init__(f"{statistic} is undefined for an empty transaction window")
        self.statistic = statistic
