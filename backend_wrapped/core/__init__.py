"""
Core cross-cutting pieces: the exception taxonomy shared by explorer,
analytics, API server and CLI.
"""

from backend_wrapped.core.exceptions import (
    EmptyWindowError,
    FetchCancelledError,
    FetchError,
    InvalidAddressError,
    InvalidTransactionError,
    UndefinedStatisticError,
    WrappedError,
)

__all__ = [
    "WrappedError",
    "InvalidAddressError",
    "FetchError",
    "FetchCancelledError",
    "InvalidTransactionError",
    "EmptyWindowError",
    "UndefinedStatisticError",
]
