"""Presentation helpers: slide cursor for the sequential reveal."""

from backend_wrapped.presentation.slide_deck import SlideDeck

__all__ = ["SlideDeck"]
