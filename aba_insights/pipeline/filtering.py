"""
Filter Predicate Evaluator
==========================

This module is the single chokepoint every dashboard view depends on.  It
narrows the flat session event log by all active facets of a ``FilterSpec``
and hands the surviving rows to the reducers in ``aggregation.py``.

Predicate semantics
-------------------
An event survives iff ALL facets accept it (AND across facets, OR within a
facet's selection set):

    client_ids    empty, or event.client_id in the set
    program_ids   empty, or event.program_id in the set
    target_ids    empty, or event.target_id in the set
    mastery       target unresolved, or min <= target.mastery <= max
    categories    empty, or program unresolved, or program.category in set
    therapists    empty, or client unresolved, or client.therapist in set
    date          start <= event.date <= end   (inclusive both ends)

Fail-open foreign keys
----------------------
An event whose client / program / target id is missing from its reference
table is NOT excluded by the predicate that needed that lookup; only that
one predicate is skipped.  This keeps the dashboard usable on partially
inconsistent data at the cost of under-filtering.  Unresolved counts are
logged at DEBUG so the behaviour is visible when investigating data.

Implementation
--------------
Each facet is a vectorised boolean mask over the event frame (``isin``,
``between``, ``Series.map`` for the joins).  The masks are AND-ed and
applied once, so the result keeps the original row order and index labels
and the input frame is never modified.
"""

import logging

import pandas as pd

from ..models.data_models import Dataset, FilterSpec

logger = logging.getLogger(__name__)


def lookup_column(keys: pd.Series, table: pd.DataFrame, column: str) -> pd.Series:
    """Resolve ``keys`` against ``table['id']`` and return ``table[column]``.

    Keys with no matching row map to NaN.  Reference ids are unique per
    table, so this is a plain dictionary-style lookup aligned to ``keys``.
    """
    mapping = table.set_index('id')[column]
    return keys.map(mapping)


def _selection_mask(values: pd.Series, selected) -> pd.Series:
    # Empty selection is the neutral element of the facet
    if not selected:
        return pd.Series(True, index=values.index)
    return values.isin(list(selected))


def filter_events(events: pd.DataFrame, spec: FilterSpec,
                  clients: pd.DataFrame, programs: pd.DataFrame,
                  targets: pd.DataFrame) -> pd.DataFrame:
    """Return the events satisfying every active facet of ``spec``.

    Args:
        events: Session event log (EVENT_COLUMNS).
        spec: The filter specification to apply.
        clients: Client reference table, keyed by ``id``.
        programs: Program reference table, keyed by ``id``.
        targets: Target reference table, keyed by ``id``.

    Returns:
        A new DataFrame holding the matching rows in their original order,
        with their original index labels.  Malformed ranges (min mastery
        above max, start after end) simply match nothing on that facet.
    """
    mask = pd.Series(True, index=events.index)

    # ── Direct id facets ─────────────────────────────────────────────────
    mask &= _selection_mask(events['client_id'], spec.client_ids)
    mask &= _selection_mask(events['program_id'], spec.program_ids)
    mask &= _selection_mask(events['target_id'], spec.target_ids)

    # ── Mastery range (always active, applies to the resolved target) ────
    target_resolved = events['target_id'].isin(targets['id'])
    mastery = pd.to_numeric(lookup_column(events['target_id'], targets, 'mastery'),
                            errors='coerce')
    mask &= ~target_resolved | mastery.between(spec.min_mastery, spec.max_mastery)

    # ── Category facet (via program) ─────────────────────────────────────
    program_resolved = events['program_id'].isin(programs['id'])
    if spec.categories:
        category = lookup_column(events['program_id'], programs, 'category')
        mask &= ~program_resolved | category.isin(list(spec.categories))

    # ── Therapist facet (via client) ─────────────────────────────────────
    client_resolved = events['client_id'].isin(clients['id'])
    if spec.therapists:
        therapist = lookup_column(events['client_id'], clients, 'therapist')
        mask &= ~client_resolved | therapist.isin(list(spec.therapists))

    # ── Date range (inclusive) ───────────────────────────────────────────
    mask &= events['date'].between(spec.start, spec.end, inclusive='both')

    unresolved = {
        'clients': int((~client_resolved).sum()),
        'programs': int((~program_resolved).sum()),
        'targets': int((~target_resolved).sum()),
    }
    if any(unresolved.values()):
        logger.debug(f"Fail-open lookups while filtering: {unresolved}")

    filtered = events[mask]
    logger.debug(f"Filtered {len(events)} events -> {len(filtered)} "
                 f"({spec.active_facet_count} selection facets active)")
    return filtered


def filter_dataset(dataset: Dataset, spec: FilterSpec) -> pd.DataFrame:
    """Convenience wrapper: ``filter_events`` over a whole Dataset."""
    return filter_events(dataset.events, spec, dataset.clients,
                         dataset.programs, dataset.targets)
