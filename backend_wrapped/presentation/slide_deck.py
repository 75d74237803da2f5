"""
Slide cursor for the one-at-a-time reveal.

The deck owns current_index; next() advances and wraps to the first slide
after the last one. The insight list itself is never mutated.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from backend_wrapped.analytics.models import Insight


class SlideDeck:
    def __init__(self, insights: Sequence[Insight]) -> None:
        if not insights:
            raise ValueError("SlideDeck needs at least one insight")
        self._insights = tuple(insights)
        self.current_index = 0

    def __len__(self) -> int:
        return len(self._insights)

    def __iter__(self) -> Iterator[Insight]:
        return iter(self._insights)

    @property
    def current(self) -> Insight:
        return self._insights[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self._insights) - 1

    def next(self) -> Insight:
        """Advance one slide (wrapping to 0) and return the new current slide."""
        self.current_index = (self.current_index + 1) % len(self._insights)
        return self.current
