"""
Unit tests for filter-state transitions and the data model they act on
"""

import dataclasses
import unittest
from datetime import datetime

import pandas as pd

from aba_insights.core.config import MASTERY_MIN, MASTERY_MAX
from aba_insights.core.utils import day_bounds
from aba_insights.models.data_models import Dataset, Event, FilterSpec, DrillDownSelection
from aba_insights.pipeline.filter_state import (
    toggle_facet, set_selection, set_date_range, set_mastery_range,
    reset_filters, apply_card_action,
)
from aba_insights.pipeline.filtering import filter_dataset
from tests.fixtures.sample_data import (
    create_sample_dataset, year_2024_spec,
    sample_clients, sample_programs, sample_targets,
)

NOW = datetime(2024, 7, 15, 9, 30)


class TestFilterSpec(unittest.TestCase):

    def test_default_window_is_six_months(self):
        spec = FilterSpec.default(NOW)
        self.assertEqual(spec.start, pd.Timestamp(2024, 1, 15))
        self.assertEqual(spec.end, pd.Timestamp(2024, 7, 15, 23, 59, 59, 999999))
        self.assertEqual(spec.min_mastery, MASTERY_MIN)
        self.assertEqual(spec.max_mastery, MASTERY_MAX)
        self.assertEqual(spec.active_facet_count, 0)

    def test_spec_is_frozen(self):
        spec = FilterSpec.default(NOW)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            spec.client_ids = ('c1',)

    def test_default_window_matches_calendar_dates(self):
        spec = FilterSpec.default(NOW)
        # A date picker showing the default window maps back to the same bounds
        self.assertEqual(day_bounds(spec.start.date(), spec.end.date()), (spec.start, spec.end))

    def test_default_includes_first_morning(self):
        events = [Event(datetime(2024, 1, 15, 8, 0), 'c1', 'p1', 't1', correct=1, incorrect=0)]
        dataset = Dataset.from_records(sample_clients(), sample_programs(), sample_targets(), events)
        self.assertEqual(len(filter_dataset(dataset, FilterSpec.default(NOW))), 1)

    def test_active_facet_count(self):
        spec = year_2024_spec(client_ids=('c1',), therapists=('x',))
        self.assertEqual(spec.active_facet_count, 2)


class TestToggleFacet(unittest.TestCase):

    def setUp(self):
        self.spec = FilterSpec.default(NOW)

    def test_toggle_adds_then_removes(self):
        added = toggle_facet(self.spec, 'client_ids', 'c1')
        self.assertEqual(added.client_ids, ('c1',))
        removed = toggle_facet(added, 'client_ids', 'c1')
        self.assertEqual(removed.client_ids, ())
        # The original spec is never changed
        self.assertEqual(self.spec.client_ids, ())

    def test_toggle_keeps_selection_order(self):
        spec = self.spec
        for value in ('Sharing', 'Academic', 'Behavioral'):
            spec = toggle_facet(spec, 'categories', value)
        spec = toggle_facet(spec, 'categories', 'Academic')
        self.assertEqual(spec.categories, ('Sharing', 'Behavioral'))

    def test_unknown_facet(self):
        with self.assertRaises(ValueError):
            toggle_facet(self.spec, 'colors', 'red')
        with self.assertRaises(ValueError):
            set_selection(self.spec, 'start', ['x'])

    def test_set_selection_deduplicates(self):
        spec = set_selection(self.spec, 'target_ids', ['t2', 't1', 't2'])
        self.assertEqual(spec.target_ids, ('t2', 't1'))


class TestRanges(unittest.TestCase):

    def test_set_date_range_coerces_timestamps(self):
        spec = set_date_range(FilterSpec.default(NOW), '2024-02-01', datetime(2024, 3, 1))
        self.assertEqual(spec.start, pd.Timestamp(2024, 2, 1))
        self.assertEqual(spec.end, pd.Timestamp(2024, 3, 1))

    def test_inverted_ranges_kept_as_given(self):
        spec = set_date_range(FilterSpec.default(NOW), '2024-06-01', '2024-01-01')
        self.assertGreater(spec.start, spec.end)
        spec = set_mastery_range(spec, 70, 20)
        self.assertEqual((spec.min_mastery, spec.max_mastery), (70.0, 20.0))

    def test_reset_filters(self):
        spec = toggle_facet(FilterSpec.default(NOW), 'therapists', 'Dr. Emily Chen')
        spec = set_mastery_range(spec, 10, 20)
        self.assertEqual(reset_filters(NOW), FilterSpec.default(NOW))
        self.assertNotEqual(spec, reset_filters(NOW))


class TestCardActions(unittest.TestCase):

    def setUp(self):
        self.dataset = create_sample_dataset()
        self.spec = year_2024_spec(client_ids=('c2',))

    def test_targets_card_focuses_mastered(self):
        spec, selection = apply_card_action(self.spec, 'targets', self.dataset.targets)
        self.assertEqual(spec.target_ids, ('t1', 't3'))
        self.assertEqual(spec.client_ids, ('c2',))
        self.assertFalse(selection.is_focused)

    def test_other_cards_only_clear_selection(self):
        for card in ('clients', 'accuracy', 'programs'):
            spec, selection = apply_card_action(self.spec, card, self.dataset.targets)
            self.assertEqual(spec, self.spec)
            self.assertEqual(selection, DrillDownSelection())

    def test_unknown_card(self):
        with self.assertRaises(ValueError):
            apply_card_action(self.spec, 'sessions', self.dataset.targets)


class TestDrillDownSelection(unittest.TestCase):

    def test_select_and_clear(self):
        selection = DrillDownSelection()
        self.assertFalse(selection.is_focused)
        focused = selection.select('t3')
        self.assertTrue(focused.is_focused)
        self.assertEqual(focused.target_id, 't3')
        self.assertEqual(focused.clear(), DrillDownSelection())


class TestDataset(unittest.TestCase):

    def test_empty_records_keep_columns(self):
        dataset = Dataset.from_records()
        self.assertIn('mastery', dataset.targets.columns)
        self.assertIn('date', dataset.events.columns)
        self.assertEqual(dataset.date_bounds, (None, None))

    def test_date_bounds(self):
        first, last = create_sample_dataset().date_bounds
        self.assertEqual(first, pd.Timestamp(2024, 1, 10))
        self.assertEqual(last, pd.Timestamp(2024, 3, 31))

    def test_event_total(self):
        event = Event(datetime(2024, 1, 1), 'c1', 'p1', 't1', correct=7, incorrect=3)
        self.assertEqual(event.total, 10)

    def test_lookup_tables_indexed_by_id(self):
        dataset = create_sample_dataset()
        self.assertEqual(dataset.programs_by_id.loc['p3', 'category'], 'Social Skills')
        self.assertEqual(dataset.clients_by_id.loc['c2', 'name'], 'Ben Carter')
        self.assertEqual(dataset.targets_by_id.loc['t2', 'mastery'], 40.0)


if __name__ == '__main__':
    unittest.main()
