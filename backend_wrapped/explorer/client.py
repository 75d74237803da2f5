"""
Etherscan explorer client: full normal-transaction history for one address.

Calls account/txlist over the whole block range (sort=desc). Every request has
a timeout; rate limits (429) and transport errors are retried with a fixed
delay; an optional threading.Event cancels the fetch between attempts and
during retry waits. Any non-success outcome raises FetchError; the caller
never receives a partial or empty list in place of a failure.
"""

from __future__ import annotations

import threading
import time
from typing import Any

import requests

from backend_wrapped.config.env import mask_api_key
from backend_wrapped.config.settings import ExplorerConfig
from backend_wrapped.core.exceptions import FetchCancelledError, FetchError
from backend_wrapped.explorer.models import Transaction, parse_transactions
from backend_wrapped.wrapped_logging import get_logger, short_wallet

logger = get_logger(__name__)

START_BLOCK = 0
END_BLOCK = 99999999
SORT_ORDER = "desc"
STATUS_OK = "1"


class EtherscanClient:
    """
    Thin requests-based client. Configuration is explicit: pass an ExplorerConfig
    (see config.settings.get_explorer_config for the env-backed one).
    """

    def __init__(self, config: ExplorerConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "EtherscanClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _params(self, address: str) -> dict[str, Any]:
        return {
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": START_BLOCK,
            "endblock": END_BLOCK,
            "sort": SORT_ORDER,
            "apikey": self.config.api_key,
        }

    def _wait(self, cancel_event: threading.Event | None) -> None:
        """Sleep retry_delay_sec; wake early and raise if cancelled."""
        delay = self.config.retry_delay_sec
        if cancel_event is None:
            time.sleep(delay)
            return
        if cancel_event.wait(delay):
            raise FetchCancelledError("explorer fetch cancelled")

    def _get_json(self, address: str, cancel_event: threading.Event | None) -> dict[str, Any]:
        last_error = "no attempt made"
        attempts = max(1, self.config.max_retries)
        for attempt in range(attempts):
            if cancel_event is not None and cancel_event.is_set():
                raise FetchCancelledError("explorer fetch cancelled")
            try:
                r = self._session.get(
                    self.config.base_url,
                    params=self._params(address),
                    timeout=self.config.timeout_sec,
                )
                if r.status_code == 429:
                    last_error = "rate limited (429)"
                    logger.warning("explorer_rate_limited", attempt=attempt + 1, wait_sec=self.config.retry_delay_sec)
                    if attempt < attempts - 1:
                        self._wait(cancel_event)
                    continue
                r.raise_for_status()
                data = r.json()
            except requests.HTTPError as e:
                logger.error("explorer_request_error", attempt=attempt + 1, error=str(e))
                raise FetchError(f"explorer HTTP error: {e}") from e
            except (requests.RequestException, ValueError) as e:
                # ValueError: body was not JSON
                last_error = str(e)
                logger.warning("explorer_request_error", attempt=attempt + 1, error=last_error)
                if attempt < attempts - 1:
                    self._wait(cancel_event)
                continue
            if not isinstance(data, dict):
                raise FetchError("explorer response is not a JSON object")
            return data
        raise FetchError(f"explorer request failed after {attempts} attempts: {last_error}")

    def fetch_raw(self, address: str, cancel_event: threading.Event | None = None) -> list[dict[str, Any]]:
        """
        Return the raw txlist result for address.

        Raises FetchError when status != "1" (including Etherscan's
        "No transactions found") or when result is not a list.
        """
        logger.info(
            "explorer_fetch_start",
            wallet=short_wallet(address),
            base_url=self.config.base_url,
            api_key=mask_api_key(self.config.api_key),
        )
        data = self._get_json(address, cancel_event)
        status = str(data.get("status", ""))
        result = data.get("result")
        if status != STATUS_OK or not isinstance(result, list):
            logger.error(
                "explorer_status_error",
                wallet=short_wallet(address),
                status=status,
                explorer_message=str(data.get("message", "")),
                result=str(result)[:200],
            )
            raise FetchError(f"explorer status {status!r}: {data.get('message', '')}")
        logger.info("explorer_fetch_done", wallet=short_wallet(address), tx_count=len(result))
        return result

    def fetch_transactions(self, address: str, cancel_event: threading.Event | None = None) -> list[Transaction]:
        """Fetch and coerce to Transaction; malformed records are logged and dropped."""
        return parse_transactions(self.fetch_raw(address, cancel_event=cancel_event))
