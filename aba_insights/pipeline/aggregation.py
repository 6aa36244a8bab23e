"""
Aggregation Reducers
====================

Four pure functions that turn the filtered event frame into everything the
dashboard renders:

    summarize            -> SummaryStats (KPI cards)
    monthly_cumulative   -> running correct / accuracy by calendar month
    program_breakdown    -> per-program totals, ranked by trial volume
    target_drilldown     -> per-target totals, optionally focused on one target

None of them keeps state or mutates its inputs, so calling any reducer
twice on the same frame returns identical output.

Accuracy guard
--------------
Every accuracy division goes through ``core.utils.accuracy_percent`` /
``format_accuracy``, which return 0.0 / "0.0" for a group with no trials.
A group can only have zero trials if its events record 0 correct and 0
incorrect, which the generator never produces, but hand-built data can.

Ranking ties
------------
Program and target rows are sorted by total trials descending with a
stable sort over first-encounter order (``groupby(sort=False)``), so two
groups with equal totals keep the order in which they first appear in the
filtered event log.
"""

import logging
from typing import Optional, Sequence

import pandas as pd

from ..core.config import MASTERY_THRESHOLD, MONTH_LABEL_FORMAT
from ..core.utils import accuracy_percent, format_accuracy
from ..models.data_models import SummaryStats
from .filtering import lookup_column

logger = logging.getLogger(__name__)

# Output columns of each reducer.  Empty inputs return frames with exactly
# these columns so charts and tables never have to special-case them.
MONTHLY_COLUMNS = ['month', 'cumulative', 'accuracy', 'trials']
PROGRAM_BREAKDOWN_COLUMNS = ['program_id', 'program', 'correct', 'incorrect', 'total', 'accuracy']
TARGET_DRILLDOWN_COLUMNS = [
    'target_id', 'target', 'program_id', 'program', 'mastery',
    'correct', 'incorrect', 'sessions', 'accuracy', 'total',
]


def _empty(columns) -> pd.DataFrame:
    return pd.DataFrame(columns=columns)


# ============================================================================
# SUMMARY COUNTER
# ============================================================================

def summarize(filtered: pd.DataFrame, client_ids: Sequence[str],
              targets: pd.DataFrame) -> SummaryStats:
    """Compute the KPI record for the summary cards.

    ``active_clients`` reports the size of an explicit client selection even
    when some selected clients have no events left after filtering; without
    a selection it counts distinct clients in ``filtered``.
    """
    correct = int(filtered['correct'].sum())
    total = int((filtered['correct'] + filtered['incorrect']).sum())

    if client_ids:
        active_clients = len(client_ids)
    else:
        active_clients = int(filtered['client_id'].nunique())

    # Mastery is read from the reference table; unresolved targets never count
    seen_targets = pd.Series(filtered['target_id'].unique(), dtype=object)
    mastery = pd.to_numeric(lookup_column(seen_targets, targets, 'mastery'), errors='coerce')

    return SummaryStats(
        active_clients=active_clients,
        total_trials=total,
        correct_trials=correct,
        avg_accuracy=accuracy_percent(correct, total),
        active_programs=int(filtered['program_id'].nunique()),
        mastered_targets=int((mastery >= MASTERY_THRESHOLD).sum()),
    )


# ============================================================================
# MONTHLY CUMULATIVE REDUCER
# ============================================================================

def monthly_cumulative(filtered: pd.DataFrame) -> pd.DataFrame:
    """Running totals by calendar month, in chronological order.

    Buckets are keyed by ``Period('M')`` rather than by the "Mon YYYY" label,
    because the label does not sort chronologically across years.  Labels
    are produced after sorting.

    Returns:
        DataFrame with columns:
        - month (str): "Mon YYYY"
        - cumulative (int): correct trials up to and including the month
        - accuracy (float): cumulative accuracy, 1 decimal, 0.0 with no trials
        - trials (int): cumulative correct + incorrect
    """
    if filtered.empty:
        return _empty(MONTHLY_COLUMNS)

    monthly = (
        filtered.assign(period=filtered['date'].dt.to_period('M'))
        .groupby('period', sort=True)[['correct', 'incorrect']]
        .sum()
    )
    cumulative_correct = monthly['correct'].cumsum()
    cumulative_trials = (monthly['correct'] + monthly['incorrect']).cumsum()

    return pd.DataFrame({
        'month': [period.strftime(MONTH_LABEL_FORMAT) for period in monthly.index],
        'cumulative': cumulative_correct.to_numpy(dtype='int64'),
        'accuracy': [round(accuracy_percent(c, t), 1)
                     for c, t in zip(cumulative_correct, cumulative_trials)],
        'trials': cumulative_trials.to_numpy(dtype='int64'),
    }, columns=MONTHLY_COLUMNS)


# ============================================================================
# PROGRAM BREAKDOWN REDUCER
# ============================================================================

def program_breakdown(filtered: pd.DataFrame, programs: pd.DataFrame) -> pd.DataFrame:
    """Per-program correct / incorrect totals, largest programs first.

    Events whose program id does not resolve are dropped rather than pooled
    under a placeholder row.
    """
    resolved = filtered[filtered['program_id'].isin(programs['id'])]
    if resolved.empty:
        return _empty(PROGRAM_BREAKDOWN_COLUMNS)

    rows = (
        resolved.groupby('program_id', sort=False)[['correct', 'incorrect']]
        .sum()
        .reset_index()
    )
    rows['program'] = lookup_column(rows['program_id'], programs, 'name')
    rows['total'] = rows['correct'] + rows['incorrect']
    rows['accuracy'] = [format_accuracy(c, t) for c, t in zip(rows['correct'], rows['total'])]

    rows = rows.sort_values('total', ascending=False, kind='stable').reset_index(drop=True)
    return rows[PROGRAM_BREAKDOWN_COLUMNS]


# ============================================================================
# TARGET DRILL-DOWN REDUCER
# ============================================================================

def target_drilldown(filtered: pd.DataFrame, targets: pd.DataFrame,
                     programs: pd.DataFrame,
                     focused_target_id: Optional[str] = None) -> pd.DataFrame:
    """Per-target rows for the drill-down table.

    Args:
        filtered: Output of ``filter_events``.
        targets: Target reference table (names and mastery).
        programs: Program reference table (program names).
        focused_target_id: When non-empty, only that target's events are
            grouped. An id with no resolvable events yields an empty frame;
            None or "" shows every target.

    Returns:
        DataFrame with TARGET_DRILLDOWN_COLUMNS, sorted by ``total``
        descending.  ``mastery`` is the reference-table value, ``sessions``
        counts contributing events and ``program`` is "" when the owning
        program cannot be resolved.
    """
    relevant = filtered
    if focused_target_id:
        relevant = filtered[filtered['target_id'] == focused_target_id]

    relevant = relevant[relevant['target_id'].isin(targets['id'])]
    if relevant.empty:
        if focused_target_id:
            logger.debug(f"No drill-down rows for focused target {focused_target_id!r}")
        return _empty(TARGET_DRILLDOWN_COLUMNS)

    rows = (
        relevant.groupby('target_id', sort=False)
        .agg(correct=('correct', 'sum'),
             incorrect=('incorrect', 'sum'),
             sessions=('correct', 'size'))
        .reset_index()
    )
    rows['target'] = lookup_column(rows['target_id'], targets, 'name')
    rows['program_id'] = lookup_column(rows['target_id'], targets, 'program_id')
    rows['mastery'] = lookup_column(rows['target_id'], targets, 'mastery')
    rows['program'] = lookup_column(rows['program_id'], programs, 'name').fillna('')
    rows['total'] = rows['correct'] + rows['incorrect']
    rows['accuracy'] = [format_accuracy(c, t) for c, t in zip(rows['correct'], rows['total'])]

    rows = rows.sort_values('total', ascending=False, kind='stable').reset_index(drop=True)
    return rows[TARGET_DRILLDOWN_COLUMNS]
