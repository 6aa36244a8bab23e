"""
ABA Insights Dashboard - Sidebar Filters
========================================

Renders the facet controls and turns the widget values into a complete
``FilterSpec``.

Architecture / Design Decision
------------------------------
Widget values live in ``st.session_state`` under the SIDEBAR_KEYS below.
On every rerun ``render_sidebar()`` rebuilds the whole spec from those
values through the transition functions in
``aba_insights.pipeline.filter_state``, stores it as
``st.session_state['filters']`` and returns it.  The spec is therefore
replaced wholesale, never patched, and the pipeline always sees one
consistent set of facets.

Facets
------
1. **Clients**: search box + multiselect (options = current selection plus
   the clients whose name matches the search).
2. **Categories**: one checkbox per distinct program category.
3. **Programs**: search box + multiselect.
4. **Targets**: search box + multiselect, restricted to the selected
   programs when any are selected, first 50 matches only.
5. **Therapists**: one checkbox per distinct therapist.
6. **Date range**: inclusive, whole days.
7. **Mastery range**: slider over the target mastery percentage.

Clear All
---------
The button is drawn before any facet widget so its callback can drop the
widget keys before they are instantiated on the next run.
"""

from typing import Dict, List

import pandas as pd
import streamlit as st

from ..core.config import MASTERY_MIN, MASTERY_MAX, DASHBOARD_TITLE
from ..core.utils import day_bounds, default_date_window
from ..models.data_models import Dataset, FilterSpec
from ..pipeline.facets import (
    distinct_categories, distinct_therapists,
    search_clients, search_programs, search_targets,
)
from ..pipeline.filter_state import (
    reset_filters, set_selection, set_date_range, set_mastery_range,
)

# Every session_state key owned by the sidebar.  Category / therapist
# checkbox keys are derived with a prefix.
SIDEBAR_KEYS = [
    'sidebar_client_search', 'sidebar_clients',
    'sidebar_program_search', 'sidebar_programs',
    'sidebar_target_search', 'sidebar_targets',
    'sidebar_dates', 'sidebar_mastery',
]
CATEGORY_PREFIX = 'sidebar_category_'
THERAPIST_PREFIX = 'sidebar_therapist_'


def clear_sidebar_state():
    """Drop every sidebar widget value so the next run starts from defaults."""
    for key in list(st.session_state.keys()):
        if key in SIDEBAR_KEYS or key.startswith((CATEGORY_PREFIX, THERAPIST_PREFIX)):
            del st.session_state[key]
    st.session_state.pop('filters', None)


def _searchable_multiselect(label: str, key: str, matches: pd.DataFrame,
                            names: Dict[str, str]) -> List[str]:
    # Keep already-selected ids as options even when the search hides them
    selected = st.session_state.setdefault(key, [])
    options = list(dict.fromkeys(list(selected) + matches['id'].tolist()))
    return st.multiselect(
        label, options,
        format_func=lambda item: names.get(item, item),
        key=key,
        label_visibility='collapsed',
    )


def _checkbox_group(values: List[str], prefix: str) -> List[str]:
    return [value for value in values if st.checkbox(value, key=f'{prefix}{value}')]


def render_sidebar(dataset: Dataset) -> FilterSpec:
    """Render the sidebar and return the resulting FilterSpec."""
    client_names = dict(zip(dataset.clients['id'], dataset.clients['name']))
    program_names = dict(zip(dataset.programs['id'], dataset.programs['name']))
    target_names = dict(zip(dataset.targets['id'], dataset.targets['name']))

    with st.sidebar:
        header, clear = st.columns([2, 1])
        header.markdown("### Filters")
        clear.button("Clear All", on_click=clear_sidebar_state, key='sidebar_clear_all')

        # ── Clients ──────────────────────────────────────────────────────
        st.markdown("**Clients**")
        client_query = st.text_input("Search clients", key='sidebar_client_search',
                                     placeholder="Search clients...",
                                     label_visibility='collapsed')
        client_ids = _searchable_multiselect(
            "Clients", 'sidebar_clients',
            search_clients(dataset.clients, client_query), client_names)

        # ── Categories ───────────────────────────────────────────────────
        st.markdown("**Categories**")
        categories = _checkbox_group(distinct_categories(dataset.programs), CATEGORY_PREFIX)

        # ── Programs ─────────────────────────────────────────────────────
        st.markdown("**Programs**")
        program_query = st.text_input("Search programs", key='sidebar_program_search',
                                      placeholder="Search programs...",
                                      label_visibility='collapsed')
        program_ids = _searchable_multiselect(
            "Programs", 'sidebar_programs',
            search_programs(dataset.programs, program_query), program_names)

        # ── Targets (scoped to the selected programs) ────────────────────
        st.markdown("**Targets**")
        target_query = st.text_input("Search targets", key='sidebar_target_search',
                                     placeholder="Search targets...",
                                     label_visibility='collapsed')
        target_ids = _searchable_multiselect(
            "Targets", 'sidebar_targets',
            search_targets(dataset.targets, target_query, program_ids), target_names)

        # ── Therapists ───────────────────────────────────────────────────
        st.markdown("**Therapists**")
        therapists = _checkbox_group(distinct_therapists(dataset.clients), THERAPIST_PREFIX)

        # ── Date range ───────────────────────────────────────────────────
        default_start, default_end = default_date_window()
        dates = st.date_input(
            "Date Range",
            value=(default_start.date(), default_end.date()),
            key='sidebar_dates',
        )
        # While the user is mid-selection only one date is returned
        if isinstance(dates, (list, tuple)) and len(dates) == 2:
            start, end = dates
        else:
            start, end = default_start.date(), default_end.date()

        # ── Mastery range ────────────────────────────────────────────────
        min_mastery, max_mastery = st.slider(
            "Mastery Range (%)", MASTERY_MIN, MASTERY_MAX,
            (MASTERY_MIN, MASTERY_MAX), step=1.0, key='sidebar_mastery',
        )

        st.markdown("---")
        st.caption(f"{DASHBOARD_TITLE} · {len(dataset.events):,} sessions loaded")

    # ── Assemble the spec ────────────────────────────────────────────────
    spec = reset_filters()
    spec = set_selection(spec, 'client_ids', client_ids)
    spec = set_selection(spec, 'program_ids', program_ids)
    spec = set_selection(spec, 'categories', categories)
    spec = set_selection(spec, 'therapists', therapists)
    spec = set_selection(spec, 'target_ids', target_ids)
    # Whole days: the end date runs to its last microsecond
    spec = set_date_range(spec, *day_bounds(start, end))
    spec = set_mastery_range(spec, min_mastery, max_mastery)

    st.session_state['filters'] = spec
    return spec
