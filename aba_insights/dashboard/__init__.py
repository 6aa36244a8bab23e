"""
ABA Insights Dashboard - Streamlit Web Interface.

Single-page dashboard with:
- Sidebar facet filters (clients, categories, programs, targets,
  therapists, date range, mastery range)
- Summary KPI cards with card actions
- Interactive Plotly charts
- Target drill-down table
"""

from .app import run_dashboard, get_dashboard_path, build_streamlit_command

__all__ = ['run_dashboard', 'get_dashboard_path', 'build_streamlit_command']
