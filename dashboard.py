"""
ABA Insights Dashboard Launcher

Serves the ABA progress dashboard as a single-page Streamlit app.

Usage:
    streamlit run dashboard.py --server.port 8501
    streamlit run dashboard.py -- --seed 7     # different synthetic dataset
    python run.py --port 8502                  # managed launch via the CLI
"""

import sys
from pathlib import Path

# Ensure aba_insights is importable when run from a source checkout
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

import streamlit as st

# ============================================================================
# PAGE CONFIG
# ============================================================================
st.set_page_config(
    page_title="ABA Progress Dashboard | Program Analysis",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ============================================================================
# NAVIGATION
# ============================================================================
pg = st.navigation([
    st.Page(
        str(project_root / "aba_insights" / "dashboard" / "streamlit_app.py"),
        title="Progress Dashboard",
        icon="📈",
        default=True,
    ),
])
pg.run()
