"""
Environment variable loading for the Crypto Wrapped backend.

- ETHERSCAN_API_KEY: explorer API key (default: empty)
- ETHERSCAN_API_URL: explorer endpoint (default: https://api.etherscan.io/api)
- EXPLORER_TIMEOUT_SEC / EXPLORER_MAX_RETRIES / EXPLORER_RETRY_DELAY_SEC: fetch hardening
- WRAPPED_TIMEZONE: zone used as "local time" for the year window and months (default: UTC)
- API_HOST / API_PORT: uvicorn bind address
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Project root: config is backend_wrapped/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_ETHERSCAN_API_URL = "https://api.etherscan.io/api"
DEFAULT_TIMEOUT_SEC = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SEC = 2.0
DEFAULT_TIMEZONE = "UTC"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


def load_wrapped_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_etherscan_api_key() -> str:
    """Return ETHERSCAN_API_KEY from env (empty string when unset)."""
    load_wrapped_env()
    return (os.getenv("ETHERSCAN_API_KEY") or "").strip()


def get_etherscan_api_url() -> str:
    """Return ETHERSCAN_API_URL from env, or the public Etherscan endpoint."""
    load_wrapped_env()
    return _env_str("ETHERSCAN_API_URL", DEFAULT_ETHERSCAN_API_URL)


def get_explorer_timeout_sec() -> float:
    load_wrapped_env()
    return max(0.1, _env_float("EXPLORER_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC))


def get_explorer_max_retries() -> int:
    load_wrapped_env()
    return max(1, _env_int("EXPLORER_MAX_RETRIES", DEFAULT_MAX_RETRIES))


def get_explorer_retry_delay_sec() -> float:
    load_wrapped_env()
    return max(0.0, _env_float("EXPLORER_RETRY_DELAY_SEC", DEFAULT_RETRY_DELAY_SEC))


def get_wrapped_timezone() -> ZoneInfo:
    """
    Return WRAPPED_TIMEZONE as a ZoneInfo.
    Unknown zone names fall back to UTC.
    """
    load_wrapped_env()
    name = _env_str("WRAPPED_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


def get_api_host() -> str:
    load_wrapped_env()
    return _env_str("API_HOST", DEFAULT_API_HOST)


def get_api_port() -> int:
    load_wrapped_env()
    return _env_int("API_PORT", DEFAULT_API_PORT)


def mask_api_key(key: str) -> str:
    """Mask an API key for logs: keep 4 leading chars."""
    if not key:
        return ""
    return key[:4] + "***" if len(key) > 4 else "***"
