"""
Pipeline module for ABA Insights.

Contains the filter predicate evaluator, the four reducers, the sidebar
facet providers and the filter-state transitions.
"""

from .filtering import filter_events, filter_dataset, lookup_column
from .aggregation import (
    summarize,
    monthly_cumulative,
    program_breakdown,
    target_drilldown,
    MONTHLY_COLUMNS,
    PROGRAM_BREAKDOWN_COLUMNS,
    TARGET_DRILLDOWN_COLUMNS,
)
from .facets import (
    distinct_categories,
    distinct_therapists,
    search_clients,
    search_programs,
    search_targets,
)
from .filter_state import (
    toggle_facet,
    set_selection,
    set_date_range,
    set_mastery_range,
    reset_filters,
    apply_card_action,
)
from .orchestrator import DashboardView, build_view

__all__ = [
    'filter_events',
    'filter_dataset',
    'lookup_column',
    'summarize',
    'monthly_cumulative',
    'program_breakdown',
    'target_drilldown',
    'MONTHLY_COLUMNS',
    'PROGRAM_BREAKDOWN_COLUMNS',
    'TARGET_DRILLDOWN_COLUMNS',
    'distinct_categories',
    'distinct_therapists',
    'search_clients',
    'search_programs',
    'search_targets',
    'toggle_facet',
    'set_selection',
    'set_date_range',
    'set_mastery_range',
    'reset_filters',
    'apply_card_action',
    'DashboardView',
    'build_view',
]
