"""
ABA Insights Dashboard - Styles & Theme Configuration
=====================================================

This module is the single source of truth for every visual constant used by
the dashboard: the light / dark palettes, the mastery color bands, the Plotly
layout theme and the injected CSS.  Nothing else in the dashboard hard-codes
colors.

Mastery Bands
-------------
Targets are colored by their mastery percentage in the drill-down table:

    Band        Mastery     Hex Color   Meaning
    ---------   ---------   ---------   ---------------------------
    Mastered    >= 80       #22c55e     At or above the mastery bar
    Emerging    50 - 79     #eab308     Progressing
    Early       < 50        #ef4444     Early acquisition

Themes
------
The theme is presentation state only.  It lives in ``st.session_state`` and
is passed explicitly into ``get_plotly_theme()`` / ``inject_css()``; the
core pipeline never sees it.
"""

import streamlit as st

from ..core.config import MASTERY_THRESHOLD, THEMES

# ============================================================================
# MASTERY BANDS
# ============================================================================

# Lower bound of the middle band; the top band starts at MASTERY_THRESHOLD.
EMERGING_THRESHOLD = 50.0

MASTERY_BANDS = {
    'Mastered': {'color': '#22c55e', 'label': 'Mastered'},
    'Emerging': {'color': '#eab308', 'label': 'Emerging'},
    'Early':    {'color': '#ef4444', 'label': 'Early'},
}


def get_mastery_band(mastery: float) -> str:
    """Return 'Mastered', 'Emerging' or 'Early' for a mastery percentage."""
    if mastery >= MASTERY_THRESHOLD:
        return 'Mastered'
    if mastery >= EMERGING_THRESHOLD:
        return 'Emerging'
    return 'Early'


# ============================================================================
# PALETTES
# ============================================================================

# Data-ink colors shared by both themes.
CHART_COLORS = {
    'cumulative': '#3b82f6',   # Blue -- cumulative correct area
    'accuracy':   '#f59e0b',   # Amber -- running accuracy line
    'correct':    '#10b981',   # Emerald -- correct trials
    'incorrect':  '#ef4444',   # Red -- incorrect trials
}

# Summary card gradients (clients, accuracy, programs, targets).
CARD_COLORS = {
    'clients':  ('#3b82f6', '#2563eb'),
    'accuracy': ('#22c55e', '#16a34a'),
    'programs': ('#a855f7', '#9333ea'),
    'targets':  ('#f97316', '#ea580c'),
}

THEME_PALETTES = {
    'light': {
        'background': '#f9fafb',
        'surface':    '#ffffff',
        'text':       '#111827',
        'muted':      '#6b7280',
        'grid':       '#e5e7eb',
    },
    'dark': {
        'background': '#111827',
        'surface':    '#1f2937',
        'text':       '#f9fafb',
        'muted':      '#9ca3af',
        'grid':       '#374151',
    },
}


def get_palette(theme: str) -> dict:
    """Palette for ``theme``; unknown names fall back to light."""
    return THEME_PALETTES.get(theme, THEME_PALETTES['light'])


def get_plotly_theme(theme: str = 'light') -> dict:
    """Base Plotly layout for the given theme.

    Designed to be unpacked into ``fig.update_layout(**get_plotly_theme(theme))``.
    """
    palette = get_palette(theme)
    return dict(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family='Inter', color=palette['text']),
        margin=dict(l=40, r=20, t=50, b=40),
        legend=dict(orientation='h', yanchor='bottom', y=1.02, x=0),
    )


def get_axis_style(theme: str = 'light') -> dict:
    palette = get_palette(theme)
    return dict(gridcolor=palette['grid'], zerolinecolor=palette['grid'],
                linecolor=palette['muted'])


# ============================================================================
# CSS INJECTION
# ============================================================================

def inject_css(theme: str = 'light'):
    """Inject the dashboard stylesheet for ``theme`` into the page.

    Covers the page background, the summary card containers and the
    drill-down hint text.  Called once per script run, after
    ``st.set_page_config``.
    """
    if theme not in THEMES:
        theme = 'light'
    palette = get_palette(theme)
    st.markdown(f"""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    .stApp {{
        font-family: 'Inter', sans-serif;
        background: {palette['background']};
        color: {palette['text']};
    }}
    section[data-testid="stSidebar"] {{
        background: {palette['surface']};
    }}

    /* Summary cards */
    .kpi-container {{
        padding: 1.25rem 1.5rem;
        border-radius: 0.75rem;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.15);
        margin-bottom: 0.5rem;
    }}
    .kpi-label {{
        color: rgba(255, 255, 255, 0.85);
        font-size: 0.85rem;
        font-weight: 500;
        margin: 0;
    }}
    .kpi-value {{
        color: #ffffff;
        font-size: 2rem;
        font-weight: 700;
        margin: 0.4rem 0 0 0;
    }}

    .section-hint {{
        color: {palette['muted']};
        font-size: 0.85rem;
    }}

    #MainMenu, footer {{ visibility: hidden; }}
</style>
""", unsafe_allow_html=True)
