"""
Application settings.

ExplorerConfig is the explicit configuration handed to the explorer client at
construction; the client itself never reads the environment. Settings bundles
it with the window timezone and API bind address.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from zoneinfo import ZoneInfo

from backend_wrapped.config.env import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_ETHERSCAN_API_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_SEC,
    DEFAULT_TIMEOUT_SEC,
    DEFAULT_TIMEZONE,
    get_api_host,
    get_api_port,
    get_etherscan_api_key,
    get_etherscan_api_url,
    get_explorer_max_retries,
    get_explorer_retry_delay_sec,
    get_explorer_timeout_sec,
    get_wrapped_timezone,
)


@dataclass(frozen=True)
class ExplorerConfig:
    """Connection settings for the Etherscan-compatible explorer API."""

    api_key: str = ""
    base_url: str = DEFAULT_ETHERSCAN_API_URL
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    """Per-request timeout (connect + read)."""
    max_retries: int = DEFAULT_MAX_RETRIES
    """Attempts per fetch; rate limits (429) and transport errors are retried."""
    retry_delay_sec: float = DEFAULT_RETRY_DELAY_SEC


@dataclass(frozen=True)
class Settings:
    explorer: ExplorerConfig = field(default_factory=ExplorerConfig)
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo(DEFAULT_TIMEZONE))
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT


def get_explorer_config() -> ExplorerConfig:
    """Build ExplorerConfig from env / .env."""
    return ExplorerConfig(
        api_key=get_etherscan_api_key(),
        base_url=get_etherscan_api_url(),
        timeout_sec=get_explorer_timeout_sec(),
        max_retries=get_explorer_max_retries(),
        retry_delay_sec=get_explorer_retry_delay_sec(),
    )


def get_settings() -> Settings:
    """
    Return the current application settings.

    Read fresh on every call so tests can monkeypatch the environment.
    """
    return Settings(
        explorer=get_explorer_config(),
        timezone=get_wrapped_timezone(),
        api_host=get_api_host(),
        api_port=get_api_port(),
    )
