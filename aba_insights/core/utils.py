"""
Utility functions for accuracy math and date handling.
"""

from datetime import datetime
from typing import Optional

import pandas as pd

from .config import DEFAULT_LOOKBACK_MONTHS


def accuracy_percent(correct, total) -> float:
    """Return correct / total as a percentage, 0.0 when there are no trials."""
    if not total:
        return 0.0
    return float(correct) * 100 / float(total)


def format_accuracy(correct, total) -> str:
    """Accuracy as a 1-decimal string ("80.0"); "0.0" for an empty group."""
    return f"{accuracy_percent(correct, total):.1f}"


def to_timestamp(value) -> pd.Timestamp:
    """Coerce a date, datetime or string to a tz-naive pd.Timestamp."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def default_date_window(now: Optional[datetime] = None,
                        months: int = DEFAULT_LOOKBACK_MONTHS):
    """Return (start, end) covering the last ``months`` months up to ``now``.

    The window spans whole days: start is midnight of the day ``months``
    months back and end is the last instant of ``now``'s day, the same
    range a pair of calendar dates selects.
    """
    today = to_timestamp(now if now is not None else datetime.now()).normalize()
    return day_bounds(today - pd.DateOffset(months=months), today)


def day_bounds(start_date, end_date):
    """Timestamps from midnight of ``start_date`` to the last instant of ``end_date``."""
    start = to_timestamp(start_date).normalize()
    end = to_timestamp(end_date).normalize() + pd.Timedelta(days=1) - pd.Timedelta(microseconds=1)
    return start, end
