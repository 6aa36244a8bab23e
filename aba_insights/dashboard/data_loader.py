"""
ABA Insights Dashboard - Data Loading
=====================================

Single entry point for getting the dataset into the Streamlit app.  The
synthetic generator runs once per seed; ``st.cache_data`` keeps the result
across reruns so only the filter pipeline re-executes on every widget
change.

Seed resolution order:
    1. ``--seed N`` passed after ``--`` on the streamlit command line
       (``streamlit run dashboard.py -- --seed 7``), as done by run.py.
    2. DEFAULT_SEED from core/config.py (``ABA_INSIGHTS_SEED`` env var).
"""

import argparse
import logging
from typing import List, Optional

import streamlit as st

from ..core.config import DEFAULT_SEED
from ..data.generator import GeneratorConfig, generate_dataset
from ..models.data_models import Dataset

logger = logging.getLogger(__name__)


def resolve_seed(argv: Optional[List[str]] = None) -> int:
    """Read ``--seed`` from script arguments, falling back to DEFAULT_SEED."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument('--seed', type=int, default=DEFAULT_SEED)
    args, _unknown = parser.parse_known_args(argv)
    return args.seed


@st.cache_data(show_spinner="Generating session data...")
def load_dataset(seed: int) -> Dataset:
    """Generate (once per seed) and return the dashboard Dataset."""
    logger.info(f"Loading synthetic dataset for seed {seed}")
    return generate_dataset(GeneratorConfig(seed=seed))
