"""
Filter-state transitions.

Every operation here takes the current ``FilterSpec`` (and, for card
actions, the drill-down selection) and returns a brand-new value; nothing is
mutated in place.  The Streamlit layer stores the results in session state
and re-runs the pipeline on the next script run.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

import pandas as pd

from ..core.config import SELECTION_FACETS, CARD_ACTIONS, MASTERY_THRESHOLD
from ..core.utils import to_timestamp
from ..models.data_models import FilterSpec, DrillDownSelection

logger = logging.getLogger(__name__)


def toggle_facet(spec: FilterSpec, facet: str, value: str) -> FilterSpec:
    """Add ``value`` to a selection facet, or remove it if already selected.

    Raises:
        ValueError: If ``facet`` is not one of SELECTION_FACETS.
    """
    if facet not in SELECTION_FACETS:
        raise ValueError(f"Unknown facet '{facet}'. Expected one of {list(SELECTION_FACETS)}")

    current = getattr(spec, facet)
    if value in current:
        updated = tuple(v for v in current if v != value)
    else:
        updated = current + (value,)
    return spec.with_changes(**{facet: updated})


def set_selection(spec: FilterSpec, facet: str, values) -> FilterSpec:
    """Replace a whole selection facet (used by multiselect widgets)."""
    if facet not in SELECTION_FACETS:
        raise ValueError(f"Unknown facet '{facet}'. Expected one of {list(SELECTION_FACETS)}")
    # dict.fromkeys keeps order and drops repeats
    return spec.with_changes(**{facet: tuple(dict.fromkeys(values))})


def set_date_range(spec: FilterSpec, start, end) -> FilterSpec:
    """Replace the date window.  A start after the end is kept as given."""
    return spec.with_changes(start=to_timestamp(start), end=to_timestamp(end))


def set_mastery_range(spec: FilterSpec, min_mastery: float, max_mastery: float) -> FilterSpec:
    """Replace the mastery window.  min above max is kept as given."""
    return spec.with_changes(min_mastery=float(min_mastery), max_mastery=float(max_mastery))


def reset_filters(now: Optional[datetime] = None) -> FilterSpec:
    """Back to the default spec (the sidebar's Clear All)."""
    return FilterSpec.default(now)


def apply_card_action(spec: FilterSpec, card: str,
                      targets: pd.DataFrame) -> Tuple[FilterSpec, DrillDownSelection]:
    """Handle a click on one of the summary cards.

    Every card clears the drill-down selection.  The ``targets`` card also
    restricts the target facet to every mastered target in the full Target
    table.

    Raises:
        ValueError: If ``card`` is not one of CARD_ACTIONS.
    """
    if card not in CARD_ACTIONS:
        raise ValueError(f"Unknown summary card '{card}'. Expected one of {list(CARD_ACTIONS)}")

    if card == 'targets':
        mastered = targets.loc[targets['mastery'] >= MASTERY_THRESHOLD, 'id'].tolist()
        logger.info(f"Targets card: focusing {len(mastered)} mastered targets")
        spec = spec.with_changes(target_ids=tuple(mastered))

    return spec, DrillDownSelection()
