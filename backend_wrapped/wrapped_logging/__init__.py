"""
Structured logging for the Crypto Wrapped backend.

JSON logs with timestamp, event_type and wallet. Use get_logger() in every module.
"""

from backend_wrapped.wrapped_logging.logger import bind_wallet, get_logger, short_wallet

__all__ = ["get_logger", "bind_wallet", "short_wallet"]
