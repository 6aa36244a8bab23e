"""
Data models for ABA Insights.
"""

from .data_models import (
    Client,
    Program,
    Target,
    Event,
    Dataset,
    FilterSpec,
    DrillDownSelection,
    SummaryStats,
    records_to_frame,
)

__all__ = [
    'Client',
    'Program',
    'Target',
    'Event',
    'Dataset',
    'FilterSpec',
    'DrillDownSelection',
    'SummaryStats',
    'records_to_frame',
]
