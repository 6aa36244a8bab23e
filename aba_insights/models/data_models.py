"""
Data models for therapy-program analytics.

This module defines the **schema layer** for ABA Insights.  It provides
typed dataclasses describing every entity that flows through the filter
pipeline, plus the conversion from record lists to the ``pandas.DataFrame``
form the pipeline actually operates on.

Role in the pipeline
--------------------
The filter predicates and reducers work on DataFrame columns (vectorised
masks and ``groupby`` aggregations), but these dataclasses serve two
purposes:

1. **Documentation** -- they formally describe the data contract between
   the synthetic generator and the core: what a client, program, target
   and session event carry.

2. **Construction** -- tests and callers can build small, explicit fixtures
   from records and turn them into frames with ``Dataset.from_records``.

Dataclass hierarchy
-------------------
::

    Client / Program / Target
        Immutable reference-table rows, each keyed by ``id``.

    Event
        One therapy session's trial outcomes for a client/program/target.

    Dataset
        Bundle of the four collections as DataFrames.

    FilterSpec
        The full set of active facets.  Replaced wholesale on every change.

    DrillDownSelection
        Unselected / SelectedTarget(id) state of the drill-down table.

    SummaryStats
        KPI record produced by the summary counter.
"""

from dataclasses import dataclass, asdict, replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Any

import pandas as pd

from ..core.config import (
    CLIENT_COLUMNS, PROGRAM_COLUMNS, TARGET_COLUMNS, EVENT_COLUMNS,
    MASTERY_MIN, MASTERY_MAX,
)
from ..core.utils import default_date_window, to_timestamp


# ============================================================================
# REFERENCE TABLE ROWS
# ============================================================================

@dataclass(frozen=True)
class Client:
    """A client receiving therapy."""
    id: str
    name: str
    age: int = 0
    diagnosis_date: Optional[datetime] = None
    therapist: str = ""
    status: str = "Active"                  # Active / Inactive / Discharged


@dataclass(frozen=True)
class Program:
    """A skill-acquisition program; owns many targets by ``program_id``."""
    id: str
    name: str
    category: str = ""
    target_count: int = 0


@dataclass(frozen=True)
class Target:
    """A specific skill trained within a program.

    ``mastery`` is a continuous 0-100 score.  ``success_rate`` mirrors the
    mastery at generation time and ``trials`` is the lifetime trial count;
    neither is recomputed from the event log.
    """
    id: str
    program_id: str
    name: str
    mastery: float = 0.0
    trials: int = 0
    success_rate: float = 0.0


@dataclass(frozen=True)
class Event:
    """One recorded session data point."""
    date: datetime
    client_id: str
    program_id: str
    target_id: str
    correct: int = 0
    incorrect: int = 0
    session_duration: int = 0               # minutes

    @property
    def total(self) -> int:
        return self.correct + self.incorrect


def records_to_frame(records, columns: List[str]) -> pd.DataFrame:
    """Convert a list of dataclass records to a DataFrame with fixed columns.

    The column list is always honoured, so an empty record list still yields
    a frame the pipeline can mask and group without KeyErrors.
    """
    rows = [asdict(r) for r in records]
    return pd.DataFrame(rows, columns=columns)


def _normalise_events(events: pd.DataFrame) -> pd.DataFrame:
    events = events.copy()
    events['date'] = pd.to_datetime(events['date'])
    for col in ('correct', 'incorrect', 'session_duration'):
        events[col] = events[col].fillna(0).astype('int64')
    return events.reset_index(drop=True)


# ============================================================================
# DATASET
# ============================================================================

@dataclass
class Dataset:
    """The four immutable collections handed to the core.

    Attributes:
        clients: Client table (CLIENT_COLUMNS).
        programs: Program table (PROGRAM_COLUMNS).
        targets: Target table (TARGET_COLUMNS).
        events: Session event log (EVENT_COLUMNS), ``date`` as datetime64.
    """
    clients: pd.DataFrame
    programs: pd.DataFrame
    targets: pd.DataFrame
    events: pd.DataFrame

    @classmethod
    def from_records(cls, clients=(), programs=(), targets=(), events=()) -> 'Dataset':
        """Build a Dataset from lists of Client/Program/Target/Event records."""
        client_df = records_to_frame(clients, CLIENT_COLUMNS)
        client_df['diagnosis_date'] = pd.to_datetime(client_df['diagnosis_date'])
        target_df = records_to_frame(targets, TARGET_COLUMNS)
        target_df['mastery'] = target_df['mastery'].astype('float64')
        return cls(
            clients=client_df,
            programs=records_to_frame(programs, PROGRAM_COLUMNS),
            targets=target_df,
            events=_normalise_events(records_to_frame(events, EVENT_COLUMNS)),
        )

    @property
    def clients_by_id(self) -> pd.DataFrame:
        return self.clients.set_index('id')

    @property
    def programs_by_id(self) -> pd.DataFrame:
        return self.programs.set_index('id')

    @property
    def targets_by_id(self) -> pd.DataFrame:
        return self.targets.set_index('id')

    @property
    def date_bounds(self) -> Tuple[Optional[pd.Timestamp], Optional[pd.Timestamp]]:
        """(earliest, latest) event date, or (None, None) for an empty log."""
        if self.events.empty:
            return None, None
        return self.events['date'].min(), self.events['date'].max()


# ============================================================================
# FILTER SPECIFICATION
# ============================================================================

@dataclass(frozen=True)
class FilterSpec:
    """Every active facet of the dashboard.

    Selection facets are tuples in the order the user picked them.  An empty
    tuple means "no restriction", never "exclude everything".  The date range
    is inclusive at both ends and the mastery range applies to the resolved
    target's mastery, not to anything on the event itself.

    Instances are frozen: every edit produces a new spec via
    ``dataclasses.replace`` so the next aggregation pass always sees a
    complete, consistent set of facets.
    """
    start: pd.Timestamp
    end: pd.Timestamp
    client_ids: Tuple[str, ...] = ()
    program_ids: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()
    therapists: Tuple[str, ...] = ()
    target_ids: Tuple[str, ...] = ()
    min_mastery: float = MASTERY_MIN
    max_mastery: float = MASTERY_MAX

    @classmethod
    def default(cls, now: Optional[datetime] = None) -> 'FilterSpec':
        """Fresh spec: last six months, full mastery range, nothing selected."""
        start, end = default_date_window(now)
        return cls(start=start, end=end)

    @classmethod
    def covering(cls, start, end, **facets) -> 'FilterSpec':
        """Spec over an explicit date range with optional facet overrides."""
        return cls(start=to_timestamp(start), end=to_timestamp(end), **facets)

    def with_changes(self, **changes) -> 'FilterSpec':
        return replace(self, **changes)

    @property
    def active_facet_count(self) -> int:
        """Number of selection facets currently narrowing the data."""
        return sum(1 for values in (self.client_ids, self.program_ids, self.categories,
                                    self.therapists, self.target_ids) if values)


# ============================================================================
# DRILL-DOWN SELECTION
# ============================================================================

@dataclass(frozen=True)
class DrillDownSelection:
    """Drill-down table state: Unselected (``target_id is None``) or
    SelectedTarget(``target_id``)."""
    target_id: Optional[str] = None

    @property
    def is_focused(self) -> bool:
        return bool(self.target_id)

    def select(self, target_id: str) -> 'DrillDownSelection':
        return DrillDownSelection(target_id=target_id)

    def clear(self) -> 'DrillDownSelection':
        return DrillDownSelection()


# ============================================================================
# SUMMARY KPI RECORD
# ============================================================================

@dataclass(frozen=True)
class SummaryStats:
    """Scalar KPIs for the summary cards.

    Attributes:
        active_clients: Requested client count when clients are selected,
            otherwise distinct clients in the filtered events.
        total_trials: Sum of correct + incorrect.
        correct_trials: Sum of correct.
        avg_accuracy: correct / total * 100, 0.0 when there are no trials.
        active_programs: Distinct programs in the filtered events.
        mastered_targets: Distinct resolved targets at or above the mastery
            threshold.
    """
    active_clients: int = 0
    total_trials: int = 0
    correct_trials: int = 0
    avg_accuracy: float = 0.0
    active_programs: int = 0
    mastered_targets: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
