"""
Structured logging: timestamp, event_type, wallet and per-event fields.

structlog with ISO timestamps, log level and consistent keys so fetch and
insight events can be aggregated. Every module uses get_logger() and logs an
event_type first, plus wallet / counts / error where relevant.

Uses only stdlib logging and structlog; no backend_wrapped imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# JSON output for deployments (LOG_FORMAT=json); human-readable otherwise
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

WALLET_LOG_PREFIX = 16


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601, UTC)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog() -> None:
    """Configure structlog once: JSON (or console), timestamp, level, event_type."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if LOG_FORMAT == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def short_wallet(address: str) -> str:
    """Wallet as logged: first 16 chars plus '...' when longer."""
    address = address or ""
    if len(address) > WALLET_LOG_PREFIX:
        return address[:WALLET_LOG_PREFIX] + "..."
    return address


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("insights_computed", wallet=short_wallet(addr), tx_count=12)

    Output (JSON): {"event_type": "insights_computed", "wallet": "...", "tx_count": 12,
    "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet: str, name: str = "backend_wrapped") -> structlog.BoundLogger:
    """Return the named logger with the (shortened) wallet bound to all subsequent calls."""
    return get_logger(name).bind(wallet=short_wallet(wallet))
