"""
End-to-end scenarios through filter and reducers on single-purpose logs
"""

import unittest
from datetime import datetime

from aba_insights.models.data_models import Dataset, Event, FilterSpec
from aba_insights.pipeline.aggregation import (
    summarize, monthly_cumulative, program_breakdown, target_drilldown,
)
from aba_insights.pipeline.filtering import filter_dataset
from tests.fixtures.sample_data import sample_clients, sample_programs, sample_targets


def _dataset(events):
    return Dataset.from_records(sample_clients(), sample_programs(), sample_targets(), events)


def _spec(**facets):
    return FilterSpec.covering(datetime(2024, 1, 1), datetime(2024, 6, 30), **facets)


class TestSingleEventScenarios(unittest.TestCase):

    def setUp(self):
        self.dataset = _dataset([
            Event(datetime(2024, 3, 1), 'c1', 'p1', 't1', correct=8, incorrect=2),
        ])

    def test_summary_of_single_event(self):
        filtered = filter_dataset(self.dataset, _spec())
        stats = summarize(filtered, (), self.dataset.targets)
        self.assertEqual(stats.total_trials, 10)
        self.assertEqual(stats.correct_trials, 8)
        self.assertEqual(stats.avg_accuracy, 80.0)

    def test_requested_clients_reported(self):
        spec = _spec(client_ids=('c1', 'c2'))
        filtered = filter_dataset(self.dataset, spec)
        stats = summarize(filtered, spec.client_ids, self.dataset.targets)
        self.assertEqual(stats.active_clients, 2)

    def test_drilldown_on_nonexistent_target(self):
        filtered = filter_dataset(self.dataset, _spec())
        rows = target_drilldown(filtered, self.dataset.targets, self.dataset.programs,
                                focused_target_id='does-not-exist')
        self.assertTrue(rows.empty)


class TestMultiEventScenarios(unittest.TestCase):

    def test_two_month_running_total(self):
        dataset = _dataset([
            Event(datetime(2024, 1, 15), 'c1', 'p1', 't1', correct=5, incorrect=0),
            Event(datetime(2024, 2, 15), 'c1', 'p1', 't1', correct=3, incorrect=2),
        ])
        monthly = monthly_cumulative(filter_dataset(dataset, _spec()))
        self.assertEqual(list(monthly['cumulative']), [5, 8])
        self.assertEqual(list(monthly['accuracy']), [100.0, 80.0])

    def test_larger_program_ranked_first(self):
        dataset = _dataset([
            Event(datetime(2024, 1, 15), 'c1', 'p1', 't1', correct=6, incorrect=4),
            Event(datetime(2024, 1, 16), 'c2', 'p2', 't3', correct=20, incorrect=5),
        ])
        rows = program_breakdown(filter_dataset(dataset, _spec()), dataset.programs)
        self.assertEqual(list(rows['program_id']), ['p2', 'p1'])
        self.assertEqual(list(rows['total']), [25, 10])


if __name__ == '__main__':
    unittest.main()
