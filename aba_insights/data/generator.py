"""
Synthetic Therapy Data Generator
================================

Produces the four immutable collections the dashboard consumes: clients,
programs, targets and the session event log.  Nothing here is real client
data; the catalogues (names, therapists, programs, target templates) live
in ``core/config.py``.

Generation rules
----------------
Clients
    One per name in CLIENT_NAMES, ids ``c1..cN``.  Age 3-12, diagnosis date
    on the first of a random month in 2020-2023, a random therapist.  The
    first 17 are Active, the next 2 Inactive, the rest Discharged.

Programs
    The fixed PROGRAM_CATALOG (12 programs across 5 categories).

Targets
    ``target_count`` per program, ids ``<program>-t<n>``.  Named from
    TARGET_TEMPLATES, falling back to "Target N".  Mastery is uniform on
    [0, 100) and the success rate mirrors it.

Events
    Discharged clients get no sessions.  Every other client works on 3-6
    randomly chosen programs and, for each target of those programs, 20-79
    sessions spread uniformly over the history window.  Each session runs
    5-19 trials with a learning curve:

        p = min(0.95, mastery / 100 + 0.3 * progress)
        correct = floor(trials * (p + U(-0.1, 0.1)))  clamped to [0, trials]

    where ``progress`` is the session's position in the window (0..1).  The
    log is sorted by date.

All randomness flows through a single ``numpy.random.Generator`` seeded
from ``GeneratorConfig.seed``, so a seed fully determines the dataset.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from ..core.config import (
    DEFAULT_SEED, GENERATOR_HISTORY_MONTHS,
    CLIENT_NAMES, THERAPISTS, ACTIVE_CLIENT_COUNT, INACTIVE_CLIENT_COUNT,
    PROGRAM_CATALOG, TARGET_TEMPLATES,
    SESSIONS_PER_TARGET, TRIALS_PER_SESSION, SESSION_MINUTES, LIFETIME_TRIALS,
    LEARNING_BONUS, MAX_SUCCESS_PROBABILITY, SUCCESS_NOISE,
    EVENT_COLUMNS,
)
from ..core.utils import to_timestamp
from ..models.data_models import Client, Program, Target, Dataset

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """
    Configuration for synthetic data generation.

    Attributes:
        seed (int): Seed for the numpy random Generator.
        start (datetime): First instant of the session window.  Defaults to
            GENERATOR_HISTORY_MONTHS months before ``end``.
        end (datetime): Last instant of the session window.  Defaults to the
            first day of the current month.
        min_programs_per_client (int): Fewest programs a client works on.
        max_programs_per_client (int): Most programs a client works on.
    """
    seed: int = DEFAULT_SEED
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    min_programs_per_client: int = 3
    max_programs_per_client: int = 6

    def resolve_window(self, now: Optional[datetime] = None) -> Tuple[pd.Timestamp, pd.Timestamp]:
        """Return the concrete (start, end) window.

        Raises:
            ValueError: If start is not before end or the program counts
                are inconsistent.
        """
        if self.min_programs_per_client > self.max_programs_per_client:
            raise ValueError(
                f"min_programs_per_client ({self.min_programs_per_client}) exceeds "
                f"max_programs_per_client ({self.max_programs_per_client})"
            )

        if self.end is not None:
            end = to_timestamp(self.end)
        else:
            end = to_timestamp(now if now is not None else datetime.now()).normalize().replace(day=1)
        if self.start is not None:
            start = to_timestamp(self.start)
        else:
            start = end - pd.DateOffset(months=GENERATOR_HISTORY_MONTHS)

        if start >= end:
            raise ValueError(f"Generator window start {start} must be before end {end}")
        return start, end


# ============================================================================
# REFERENCE TABLES
# ============================================================================

def generate_clients(rng: np.random.Generator) -> List[Client]:
    clients = []
    for i, name in enumerate(CLIENT_NAMES):
        if i < ACTIVE_CLIENT_COUNT:
            status = 'Active'
        elif i < ACTIVE_CLIENT_COUNT + INACTIVE_CLIENT_COUNT:
            status = 'Inactive'
        else:
            status = 'Discharged'
        clients.append(Client(
            id=f'c{i + 1}',
            name=name,
            age=int(rng.integers(3, 13)),
            diagnosis_date=datetime(2020 + int(rng.integers(0, 4)), int(rng.integers(1, 13)), 1),
            therapist=str(rng.choice(THERAPISTS)),
            status=status,
        ))
    return clients


def generate_programs() -> List[Program]:
    return [Program(id=pid, name=name, category=category, target_count=count)
            for pid, name, category, count in PROGRAM_CATALOG]


def generate_targets(rng: np.random.Generator, programs: List[Program]) -> List[Target]:
    """Targets for every program, named from TARGET_TEMPLATES."""
    targets = []
    for program in programs:
        templates = TARGET_TEMPLATES.get(program.name, [])
        for i in range(program.target_count):
            mastery = float(rng.uniform(0, 100))
            targets.append(Target(
                id=f'{program.id}-t{i + 1}',
                program_id=program.id,
                name=templates[i] if i < len(templates) else f'Target {i + 1}',
                mastery=mastery,
                trials=int(rng.integers(*LIFETIME_TRIALS)),
                success_rate=mastery,
            ))
    return targets


# ============================================================================
# EVENT LOG
# ============================================================================

def _simulate_sessions(rng: np.random.Generator, client_id: str, target: Target,
                       start: pd.Timestamp, span: pd.Timedelta) -> pd.DataFrame:
    n = int(rng.integers(*SESSIONS_PER_TARGET))
    progress = rng.random(n)

    success = np.minimum(MAX_SUCCESS_PROBABILITY,
                         target.mastery / 100 + LEARNING_BONUS * progress)
    trials = rng.integers(*TRIALS_PER_SESSION, size=n)
    noise = (rng.random(n) - 0.5) * SUCCESS_NOISE
    correct = np.clip(np.floor(trials * (success + noise)), 0, trials).astype('int64')

    return pd.DataFrame({
        'date': start + pd.to_timedelta(progress * span.total_seconds(), unit='s'),
        'client_id': client_id,
        'program_id': target.program_id,
        'target_id': target.id,
        'correct': correct,
        'incorrect': trials - correct,
        'session_duration': rng.integers(*SESSION_MINUTES, size=n),
    }, columns=EVENT_COLUMNS)


def generate_events(rng: np.random.Generator, clients: List[Client],
                    programs: List[Program], targets: List[Target],
                    start: pd.Timestamp, end: pd.Timestamp,
                    min_programs: int = 3, max_programs: int = 6) -> pd.DataFrame:
    """Simulate the session log for every non-discharged client."""
    span = end - start
    targets_by_program = {}
    for target in targets:
        targets_by_program.setdefault(target.program_id, []).append(target)

    frames = []
    for client in clients:
        if client.status == 'Discharged':
            continue
        n_programs = min(int(rng.integers(min_programs, max_programs + 1)), len(programs))
        chosen = rng.permutation(len(programs))[:n_programs]
        for idx in chosen:
            for target in targets_by_program.get(programs[idx].id, []):
                frames.append(_simulate_sessions(rng, client.id, target, start, span))

    if not frames:
        return pd.DataFrame(columns=EVENT_COLUMNS).astype({'date': 'datetime64[ns]'})

    events = pd.concat(frames, ignore_index=True)
    return events.sort_values('date', kind='stable').reset_index(drop=True)


def generate_dataset(config: Optional[GeneratorConfig] = None,
                     now: Optional[datetime] = None) -> Dataset:
    """Generate a complete, internally consistent Dataset.

    Args:
        config: Generation settings; defaults to ``GeneratorConfig()``.
        now: Reference time for the default window (testing hook).

    Returns:
        Dataset whose every event id resolves in the reference tables.
    """
    config = config or GeneratorConfig()
    start, end = config.resolve_window(now)
    rng = np.random.default_rng(config.seed)

    clients = generate_clients(rng)
    programs = generate_programs()
    targets = generate_targets(rng, programs)
    events = generate_events(rng, clients, programs, targets, start, end,
                             config.min_programs_per_client,
                             config.max_programs_per_client)

    dataset = Dataset.from_records(clients=clients, programs=programs, targets=targets)
    dataset.events = events

    logger.info(f"Generated {len(events)} events for {len(clients)} clients, "
                f"{len(programs)} programs, {len(targets)} targets "
                f"({start.date()} to {end.date()}, seed={config.seed})")
    return dataset
