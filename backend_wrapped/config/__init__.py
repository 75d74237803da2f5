"""
Configuration management for the Crypto Wrapped backend.

Loads settings from environment variables and an optional .env file and
exposes them as typed, immutable objects.
"""

from backend_wrapped.config.settings import ExplorerConfig, Settings, get_explorer_config, get_settings  # noqa: F401

__all__ = ["ExplorerConfig", "Settings", "get_explorer_config", "get_settings"]
