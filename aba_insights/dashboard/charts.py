"""
ABA Insights Dashboard - Chart Library
======================================

Every public function returns either a ``plotly.graph_objects.Figure`` or an
HTML string that Streamlit renders via ``st.plotly_chart()`` /
``st.markdown(..., unsafe_allow_html=True)``.  The builders only consume the
frames produced by ``aba_insights.pipeline.aggregation``; they never filter
or aggregate themselves.

Consistency comes from ``_apply_theme()``, which merges the Plotly layout of
the active theme and the axis grid styling into every figure.  Empty inputs
produce an annotated empty figure instead of raising, so a filter that
matches nothing still renders a sensible placeholder.
"""

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from .styles import CHART_COLORS, CARD_COLORS, get_plotly_theme, get_axis_style


def _apply_theme(fig: go.Figure, theme: str = 'light') -> go.Figure:
    """Apply the theme layout and axis styling to ``fig`` in place."""
    fig.update_layout(**get_plotly_theme(theme))
    fig.update_xaxes(**get_axis_style(theme))
    fig.update_yaxes(**get_axis_style(theme))
    return fig


def _empty_figure(title: str, theme: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text="No sessions match the current filters",
                       showarrow=False, xref='paper', yref='paper', x=0.5, y=0.5)
    _apply_theme(fig, theme)
    fig.update_layout(title=title, height=300)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


# ============================================================================
# KPI CARDS
# ============================================================================

def kpi_card_html(label: str, value: str, card: str = 'clients') -> str:
    """Build one summary card as an HTML snippet.

    ``card`` picks the gradient from CARD_COLORS (clients, accuracy,
    programs, targets).
    """
    top, bottom = CARD_COLORS.get(card, CARD_COLORS['clients'])
    return f"""
    <div class="kpi-container" style="background: linear-gradient(135deg, {top}, {bottom});">
        <p class="kpi-label">{label}</p>
        <p class="kpi-value">{value}</p>
    </div>
    """


# ============================================================================
# CUMULATIVE PROGRESS
# ============================================================================

def chart_cumulative_progress(monthly: pd.DataFrame, theme: str = 'light') -> go.Figure:
    """Cumulative correct trials (area) with running accuracy (line).

    Parameters
    ----------
    monthly : pd.DataFrame
        Output of ``monthly_cumulative`` (month, cumulative, accuracy, trials).
    theme : str
        'light' or 'dark'.
    """
    title = 'Cumulative Progress'
    if monthly.empty:
        return _empty_figure(title, theme)

    fig = make_subplots(specs=[[{'secondary_y': True}]])
    fig.add_trace(go.Scatter(
        x=monthly['month'], y=monthly['cumulative'],
        mode='lines', name='Cumulative Correct Trials',
        line=dict(color=CHART_COLORS['cumulative'], width=2, shape='spline'),
        fill='tozeroy', fillcolor='rgba(59, 130, 246, 0.25)',
        customdata=monthly['trials'],
        hovertemplate='%{x}<br>Correct: %{y:,}<br>Trials: %{customdata:,}<extra></extra>',
    ), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=monthly['month'], y=monthly['accuracy'],
        mode='lines+markers', name='Accuracy %',
        line=dict(color=CHART_COLORS['accuracy'], width=2, dash='dot'),
        hovertemplate='%{x}<br>Accuracy: %{y:.1f}%<extra></extra>',
    ), secondary_y=True)

    _apply_theme(fig, theme)
    fig.update_layout(title=title, height=320, hovermode='x unified')
    fig.update_yaxes(title_text='Correct trials', secondary_y=False)
    fig.update_yaxes(title_text='Accuracy %', range=[0, 100], secondary_y=True, showgrid=False)
    return fig


# ============================================================================
# PROGRAM PERFORMANCE
# ============================================================================

def chart_program_breakdown(programs: pd.DataFrame, theme: str = 'light') -> go.Figure:
    """Grouped correct / incorrect bars per program, largest first.

    ``programs`` is the output of ``program_breakdown`` and is plotted in the
    order given.
    """
    title = 'Program Performance'
    if programs.empty:
        return _empty_figure(title, theme)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=programs['program'], y=programs['correct'], name='Correct',
        marker_color=CHART_COLORS['correct'],
        customdata=programs['accuracy'],
        hovertemplate='%{x}<br>Correct: %{y:,}<br>Accuracy: %{customdata}%<extra></extra>',
    ))
    fig.add_trace(go.Bar(
        x=programs['program'], y=programs['incorrect'], name='Incorrect',
        marker_color=CHART_COLORS['incorrect'],
        hovertemplate='%{x}<br>Incorrect: %{y:,}<extra></extra>',
    ))

    _apply_theme(fig, theme)
    fig.update_layout(title=title, height=420, barmode='group')
    fig.update_xaxes(tickangle=-45)
    fig.update_yaxes(title_text='Trials')
    return fig
