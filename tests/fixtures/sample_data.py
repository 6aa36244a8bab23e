"""
Sample data fixtures for testing

Small hand-built datasets whose aggregates can be worked out on paper.

Events of ``create_sample_dataset()`` (index: date client program target c/i):

    0  2024-01-10  c1  p1  t1  8/2
    1  2024-01-20  c2  p2  t3  5/5
    2  2024-02-05  c1  p1  t2  3/7
    3  2024-02-15  c3  p3  t4  6/4
    4  2024-03-01  c2  p1  t1  9/1
    5  2024-03-31  c1  p2  t3  7/3

Target mastery: t1 85, t2 40, t3 90, t4 60.
"""

from datetime import datetime

from aba_insights.models.data_models import (
    Client, Program, Target, Event, Dataset, FilterSpec,
)

THERAPIST_A = 'Dr. Sarah Mitchell'
THERAPIST_B = 'Dr. Emily Chen'


def sample_clients():
    return [
        Client(id='c1', name='Alice Moore', age=6, therapist=THERAPIST_A),
        Client(id='c2', name='Ben Carter', age=8, therapist=THERAPIST_B),
        Client(id='c3', name='Cara Lopez', age=4, therapist=THERAPIST_A),
    ]


def sample_programs():
    return [
        Program(id='p1', name='Requesting', category='Communication', target_count=2),
        Program(id='p2', name='Labeling', category='Communication', target_count=1),
        Program(id='p3', name='Sharing', category='Social Skills', target_count=1),
    ]


def sample_targets():
    return [
        Target(id='t1', program_id='p1', name='Request for water', mastery=85.0),
        Target(id='t2', program_id='p1', name='Request for snack', mastery=40.0),
        Target(id='t3', program_id='p2', name='Label colors', mastery=90.0),
        Target(id='t4', program_id='p3', name='Share toy', mastery=60.0),
    ]


def sample_events():
    return [
        Event(datetime(2024, 1, 10), 'c1', 'p1', 't1', correct=8, incorrect=2, session_duration=30),
        Event(datetime(2024, 1, 20), 'c2', 'p2', 't3', correct=5, incorrect=5, session_duration=25),
        Event(datetime(2024, 2, 5), 'c1', 'p1', 't2', correct=3, incorrect=7, session_duration=20),
        Event(datetime(2024, 2, 15), 'c3', 'p3', 't4', correct=6, incorrect=4, session_duration=40),
        Event(datetime(2024, 3, 1), 'c2', 'p1', 't1', correct=9, incorrect=1, session_duration=35),
        Event(datetime(2024, 3, 31), 'c1', 'p2', 't3', correct=7, incorrect=3, session_duration=30),
    ]


def create_sample_dataset(extra_events=()):
    """
    Create the sample dataset for testing.

    Args:
        extra_events: Events appended after the six sample events.

    Returns:
        Dataset: Three clients, three programs, four targets.
    """
    return Dataset.from_records(
        clients=sample_clients(),
        programs=sample_programs(),
        targets=sample_targets(),
        events=sample_events() + list(extra_events),
    )


def create_orphan_dataset():
    """
    Sample dataset plus one event (index 6) whose client, program and target
    ids resolve nowhere.
    """
    orphan = Event(datetime(2024, 2, 20), 'c9', 'p9', 't9', correct=4, incorrect=1)
    return create_sample_dataset(extra_events=[orphan])


def year_2024_spec(**facets):
    """FilterSpec covering all of 2024 with optional facet overrides."""
    return FilterSpec.covering(datetime(2024, 1, 1), datetime(2024, 12, 31, 23, 59, 59), **facets)
