"""
Crypto Wrapped analytics.

Trailing-year window, the nine-statistic insight engine with its summary, and
the fetch -> compute pipeline used by the API and CLI.
"""

from backend_wrapped.analytics.insight_engine import compute_insights
from backend_wrapped.analytics.models import Insight
from backend_wrapped.analytics.wrapped_pipeline import build_wrapped, run_wrapped
from backend_wrapped.analytics.year_window import filter_year_window

__all__ = [
    "Insight",
    "compute_insights",
    "filter_year_window",
    "build_wrapped",
    "run_wrapped",
]
