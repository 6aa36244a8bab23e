"""
ABA Insights - progress analytics for ABA therapy programs.

This package provides:
- A filter predicate evaluator over session events
- Summary, monthly cumulative, program and target reducers
- Sidebar facet option providers and filter-state transitions
- A seeded synthetic dataset generator
- A Streamlit + Plotly dashboard over all of the above
"""

__version__ = "1.0.0"
__author__ = "ABA Insights Team"

# Core imports
from .core.config import *
from .core.utils import accuracy_percent, format_accuracy, default_date_window

# Data model
from .models import (
    Client,
    Program,
    Target,
    Event,
    Dataset,
    FilterSpec,
    DrillDownSelection,
    SummaryStats,
)

# Pipeline
from .pipeline import (
    filter_events,
    filter_dataset,
    summarize,
    monthly_cumulative,
    program_breakdown,
    target_drilldown,
    distinct_categories,
    distinct_therapists,
    search_clients,
    search_programs,
    search_targets,
    toggle_facet,
    reset_filters,
    apply_card_action,
    DashboardView,
    build_view,
)

# Synthetic data
from .data import GeneratorConfig, generate_dataset

# Dashboard launcher
from .dashboard import run_dashboard

__all__ = [
    # Version
    '__version__',
    # Model
    'Client',
    'Program',
    'Target',
    'Event',
    'Dataset',
    'FilterSpec',
    'DrillDownSelection',
    'SummaryStats',
    # Pipeline
    'filter_events',
    'filter_dataset',
    'summarize',
    'monthly_cumulative',
    'program_breakdown',
    'target_drilldown',
    'distinct_categories',
    'distinct_therapists',
    'search_clients',
    'search_programs',
    'search_targets',
    'toggle_facet',
    'reset_filters',
    'apply_card_action',
    'DashboardView',
    'build_view',
    # Utilities
    'accuracy_percent',
    'format_accuracy',
    'default_date_window',
    # Data
    'GeneratorConfig',
    'generate_dataset',
    # Dashboard
    'run_dashboard',
]
