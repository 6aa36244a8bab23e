"""
Facet option providers for the sidebar.

Categories and therapists are always derived from the full reference
tables, never from the filtered events, so the checkbox lists do not
shrink as other facets narrow the data.  The name searches are plain
case-insensitive substring matches; only the target search responds to
another facet (the selected programs).
"""

import logging
from typing import List, Sequence

import pandas as pd

from ..core.config import TARGET_SEARCH_LIMIT

logger = logging.getLogger(__name__)


def _distinct(values: pd.Series) -> List[str]:
    # First-appearance order, like the option lists users are used to
    return values.dropna().drop_duplicates().tolist()


def distinct_categories(programs: pd.DataFrame) -> List[str]:
    """Distinct program categories over the whole Program table."""
    return _distinct(programs['category'])


def distinct_therapists(clients: pd.DataFrame) -> List[str]:
    """Distinct therapist names over the whole Client table."""
    return _distinct(clients['therapist'])


def _name_matches(table: pd.DataFrame, query: str) -> pd.DataFrame:
    needle = (query or '').lower()
    if not needle:
        return table
    mask = table['name'].astype(str).str.lower().str.contains(needle, regex=False)
    return table[mask]


def search_clients(clients: pd.DataFrame, query: str) -> pd.DataFrame:
    """Clients whose name contains ``query`` (case-insensitive)."""
    return _name_matches(clients, query)


def search_programs(programs: pd.DataFrame, query: str) -> pd.DataFrame:
    """Programs whose name contains ``query`` (case-insensitive)."""
    return _name_matches(programs, query)


def search_targets(targets: pd.DataFrame, query: str,
                   program_ids: Sequence[str] = (),
                   limit: int = TARGET_SEARCH_LIMIT) -> pd.DataFrame:
    """Targets whose name contains ``query``, capped at ``limit`` rows.

    When ``program_ids`` is non-empty the search only covers targets owned
    by those programs.
    """
    candidates = targets
    if program_ids:
        candidates = targets[targets['program_id'].isin(list(program_ids))]
    matches = _name_matches(candidates, query)
    if len(matches) > limit:
        logger.debug(f"Target search {query!r} matched {len(matches)} rows; showing {limit}")
    return matches.head(limit)
