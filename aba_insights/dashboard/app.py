"""
Dashboard launch helpers.

The page itself lives in ``streamlit_app.py``; the repository-root
``dashboard.py`` sets the page config and runs it.  These helpers let
``run.py`` (or any caller) start the Streamlit server as a subprocess.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from ..core.config import DASHBOARD_PORT, DEFAULT_SEED

logger = logging.getLogger(__name__)


def get_dashboard_path() -> Path:
    """Get the path to the Streamlit entry script at the repository root."""
    return Path(__file__).resolve().parent.parent.parent / "dashboard.py"


def build_streamlit_command(port: int = DASHBOARD_PORT, seed: int = DEFAULT_SEED,
                            headless: bool = True) -> List[str]:
    """Command line that serves the dashboard on ``port`` with ``seed``."""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(get_dashboard_path()),
        "--server.port", str(port),
        "--server.headless", "true" if headless else "false",
        "--browser.gatherUsageStats", "false",
        "--", "--seed", str(seed),
    ]


def run_dashboard(port: int = DASHBOARD_PORT, seed: int = DEFAULT_SEED,
                  headless: bool = True) -> Optional[subprocess.Popen]:
    """
    Launch the Streamlit dashboard.

    Args:
        port: Port to run on (default DASHBOARD_PORT)
        seed: Synthetic dataset seed passed through to the app
        headless: Do not let Streamlit open a browser itself

    Returns:
        The running Popen handle, or None if the entry script is missing.
    """
    app_path = get_dashboard_path()
    if not app_path.exists():
        logger.error(f"Dashboard entry script not found at {app_path}")
        return None

    cmd = build_streamlit_command(port=port, seed=seed, headless=headless)
    logger.info(f"Starting dashboard: {' '.join(cmd)}")
    return subprocess.Popen(cmd)
