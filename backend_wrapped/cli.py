"""
Crypto Wrapped in the terminal.

Fetches the wallet's history and prints the slides ("Slide n: text"), or with
--interactive reveals one slide per Enter press until the last one.

Env: ETHERSCAN_API_KEY, ETHERSCAN_API_URL, WRAPPED_TIMEZONE.

Usage:
  python -m backend_wrapped.cli 0xWALLET [--as-of 2025-06-01] [--interactive]
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import Callable, Sequence

from backend_wrapped.analytics.wrapped_pipeline import TransactionSource, run_wrapped
from backend_wrapped.config.settings import get_settings
from backend_wrapped.explorer.client import EtherscanClient
from backend_wrapped.presentation.slide_deck import SlideDeck
from backend_wrapped.wrapped_logging import get_logger

logger = get_logger(__name__)


def _parse_as_of(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {raw!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show a wallet's Crypto Wrapped slides.")
    parser.add_argument("address", nargs="?", default="", help="Ethereum wallet address")
    parser.add_argument(
        "--as-of",
        type=_parse_as_of,
        default=None,
        help="Reference date (ISO 8601) instead of now; the window starts Jan 1 of the previous year.",
    )
    parser.add_argument("--interactive", action="store_true", help="Reveal one slide per Enter press.")
    return parser


def reveal(deck: SlideDeck, prompt: Callable[[str], str] = input) -> None:
    """Print the current slide, wait for Enter, advance; stops after the last slide."""
    while True:
        print(f"[{deck.current_index + 1}/{len(deck)}] {deck.current.text}")
        if deck.is_last:
            return
        prompt("Press Enter for the next slide...")
        deck.next()


def main(
    argv: Sequence[str] | None = None,
    source: TransactionSource | None = None,
    prompt: Callable[[str], str] = input,
) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if source is None:
        with EtherscanClient(settings.explorer) as client:
            outcome = run_wrapped(args.address, client, now=args.as_of, tz=settings.timezone)
    else:
        outcome = run_wrapped(args.address, source, now=args.as_of, tz=settings.timezone)

    if not outcome.ok:
        print(outcome.error, file=sys.stderr)
        return 1

    result = outcome.result
    print(result.title)
    if args.interactive:
        reveal(SlideDeck(result.insights), prompt=prompt)
    else:
        for index, insight in enumerate(result.insights, start=1):
            print(f"Slide {index}: {insight.text}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
