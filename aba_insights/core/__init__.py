"""
Core module for ABA Insights.

Contains configuration constants and shared helpers.
"""

from .config import *
from .utils import accuracy_percent, format_accuracy, to_timestamp, default_date_window, day_bounds
