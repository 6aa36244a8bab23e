"""
ABA Insights Dashboard - Main Page
==================================

Layout overview (top to bottom):
    1. **Header**: title, subtitle and the light / dark theme toggle.
    2. **Summary cards**: Active Clients, Avg Accuracy, Active Programs,
       Mastered Targets.  Each card has an action button; every card clears
       the drill-down selection and the targets card additionally focuses
       the target facet on all mastered targets.
    3. **Cumulative Progress**: running correct trials + accuracy by month.
    4. **Program Performance**: correct / incorrect bars per program.
    5. **Target Drill Down**: per-target table.  Selecting a row focuses the
       table on that target until "Clear Selection" is pressed.

Key session_state entries
-------------------------
* ``filters``            FilterSpec built by the sidebar on every run.
* ``drilldown``          DrillDownSelection (Unselected / SelectedTarget).
* ``drilldown_version``  Suffix of the table widget key; bumping it resets
                         the table's own row selection.
* ``theme_dark``         Theme toggle value.

Every run recomputes the full view from the (cached) dataset.

Usage:
    streamlit run dashboard.py
"""

import logging

import streamlit as st

from aba_insights.core.config import DASHBOARD_TITLE, DEFAULT_THEME
from aba_insights.models.data_models import DrillDownSelection
from aba_insights.pipeline.filter_state import apply_card_action
from aba_insights.pipeline.orchestrator import build_view
from aba_insights.dashboard.data_loader import load_dataset, resolve_seed
from aba_insights.dashboard.sidebar import render_sidebar
from aba_insights.dashboard.styles import inject_css, get_mastery_band, MASTERY_BANDS
from aba_insights.dashboard.charts import (
    kpi_card_html, chart_cumulative_progress, chart_program_breakdown,
)

logger = logging.getLogger(__name__)

CARD_SPECS = [
    # (card, label, button text)
    ('clients', 'Active Clients', 'Show targets'),
    ('accuracy', 'Avg Accuracy', 'Show targets'),
    ('programs', 'Active Programs', 'Show targets'),
    ('targets', 'Mastered Targets', 'Focus mastered'),
]


# ============================================================================
# SESSION STATE CALLBACKS
# ============================================================================

def _reset_table_selection():
    st.session_state['drilldown_version'] = st.session_state.get('drilldown_version', 0) + 1


def _on_card_click(card: str, targets):
    spec, selection = apply_card_action(st.session_state['filters'], card, targets)
    st.session_state['drilldown'] = selection
    # The target multiselect owns target_ids; write through its widget key
    st.session_state['sidebar_targets'] = list(spec.target_ids)
    _reset_table_selection()


def _on_clear_selection():
    st.session_state['drilldown'] = st.session_state['drilldown'].clear()
    _reset_table_selection()


# ============================================================================
# PAGE
# ============================================================================

st.session_state.setdefault('drilldown', DrillDownSelection())
st.session_state.setdefault('drilldown_version', 0)
st.session_state.setdefault('theme_dark', DEFAULT_THEME == 'dark')

theme = 'dark' if st.session_state['theme_dark'] else 'light'
inject_css(theme)

dataset = load_dataset(resolve_seed())
spec = render_sidebar(dataset)
selection = st.session_state['drilldown']
view = build_view(dataset, spec, selection)

# ── Header ───────────────────────────────────────────────────────────────
title_col, theme_col = st.columns([5, 1])
with title_col:
    st.title(DASHBOARD_TITLE)
    st.caption("Comprehensive program analysis and client progress tracking")
with theme_col:
    st.toggle("Dark mode", key='theme_dark')

# ── Summary cards ────────────────────────────────────────────────────────
summary = view.summary
card_values = {
    'clients': f"{summary.active_clients:,}",
    'accuracy': f"{summary.avg_accuracy:.1f}%",
    'programs': f"{summary.active_programs:,}",
    'targets': f"{summary.mastered_targets:,}",
}
for column, (card, label, action) in zip(st.columns(4), CARD_SPECS):
    with column:
        st.markdown(kpi_card_html(label, card_values[card], card), unsafe_allow_html=True)
        st.button(action, key=f'card_{card}', on_click=_on_card_click,
                  args=(card, dataset.targets), use_container_width=True)

# ── Charts ───────────────────────────────────────────────────────────────
st.plotly_chart(chart_cumulative_progress(view.monthly, theme), use_container_width=True)
st.plotly_chart(chart_program_breakdown(view.programs, theme), use_container_width=True)

# ── Target drill-down ────────────────────────────────────────────────────
heading_col, clear_col = st.columns([5, 1])
heading_col.subheader("Target Drill Down")
if selection.is_focused:
    clear_col.button("Clear Selection", on_click=_on_clear_selection, key='clear_selection')
else:
    heading_col.markdown('<p class="section-hint">Select a row to focus on one target.</p>',
                         unsafe_allow_html=True)
heading_col.markdown(" ".join(
    f'<span style="color: {band["color"]};">&#9679; {band["label"]}</span>'
    for band in MASTERY_BANDS.values()
), unsafe_allow_html=True)

table = view.targets[['target', 'program', 'mastery', 'accuracy', 'total', 'sessions']].assign(
    status=view.targets['mastery'].map(get_mastery_band),
)
event = st.dataframe(
    table,
    key=f"drilldown_table_{st.session_state['drilldown_version']}",
    hide_index=True,
    use_container_width=True,
    on_select='rerun',
    selection_mode='single-row',
    column_config={
        'target': st.column_config.TextColumn("Target"),
        'program': st.column_config.TextColumn("Program"),
        'mastery': st.column_config.ProgressColumn("Mastery", min_value=0, max_value=100,
                                                   format="%.0f%%"),
        'accuracy': st.column_config.TextColumn("Accuracy %"),
        'total': st.column_config.NumberColumn("Total Trials", format="%d"),
        'sessions': st.column_config.NumberColumn("Sessions", format="%d"),
        'status': st.column_config.TextColumn("Status"),
    },
)

selected_rows = event.selection.rows if event is not None else []
if selected_rows and not selection.is_focused:
    target_id = view.targets.iloc[selected_rows[0]]['target_id']
    logger.debug(f"Drill-down focused on target {target_id}")
    st.session_state['drilldown'] = selection.select(target_id)
    _reset_table_selection()
    st.rerun()
