"""
Test Aggregation Module
=======================
Unit tests cho PeriodSummary và EntryAggregator.
"""

import pytest
import pandas as pd
from datetime import date, datetime
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cfdownloads.aggregation.aggregator import EntryAggregator, normalize_date
from cfdownloads.aggregation.summary import PeriodSummary
from cfdownloads.data.classifier import Category
from cfdownloads.errors import AggregatorFinalizedError


class TestPeriodSummary:
    """Test cases cho PeriodSummary."""

    def test_defaults_to_zero(self):
        summary = PeriodSummary(date(2024, 1, 1))

        assert summary.total == 0
        assert all(summary.count(c) == 0 for c in Category)
        assert summary.period_key == '2024-01-01'

    def test_add_one_keeps_invariant(self):
        summary = PeriodSummary(date(2024, 1, 1))
        for category in [Category.LINUX, Category.LINUX, Category.UNKNOWN]:
            summary.add_one(category)

        assert summary.total == 3
        assert summary.count(Category.LINUX) == 2
        assert summary.total == sum(summary.counts.values())

    def test_merge_sums_both_operands(self):
        """merge cộng counts của cả hai summary."""
        a = PeriodSummary(date(2024, 1, 1))
        b = PeriodSummary(date(2024, 1, 2))
        a.add_one(Category.LINUX)
        b.add_one(Category.LINUX)
        b.add_one(Category.DARWIN)

        a.merge(b)

        assert a.total == 3
        assert a.count(Category.LINUX) == 2
        assert a.count(Category.DARWIN) == 1
        assert b.total == 2

    def test_copy_is_independent(self):
        a = PeriodSummary(date(2024, 1, 1))
        a.add_one(Category.SOURCE)
        b = a.copy()
        b.add_one(Category.SOURCE)

        assert a.total == 1
        assert b.total == 2

    def test_as_dict_and_str(self):
        summary = PeriodSummary(date(2024, 1, 1))
        summary.add_one(Category.WINDOWS)

        assert summary.as_dict() == {
            'date': '2024-01-01', 'total': 1, 'unknown': 0, 'linux': 0,
            'darwin': 0, 'windows': 1, 'source': 0,
        }
        assert str(summary) == '2024-01-01: 1'


class TestNormalizeDate:

    def test_supported_types(self):
        expected = date(2024, 1, 1)

        assert normalize_date(expected) == expected
        assert normalize_date(datetime(2024, 1, 1, 23, 59)) == expected
        assert normalize_date(pd.Timestamp('2024-01-01 08:30')) == expected
        assert normalize_date('2024-01-01') == expected

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            normalize_date(20240101)


class TestEntryAggregator:
    """Test cases cho EntryAggregator."""

    @pytest.fixture
    def aggregator(self):
        return EntryAggregator()

    def test_counts_on_single_date(self, aggregator):
        """{Linux:3, Darwin:2, Windows:1} → total=6."""
        day = date(2024, 1, 1)
        for category, n in [(Category.LINUX, 3), (Category.DARWIN, 2), (Category.WINDOWS, 1)]:
            for _ in range(n):
                aggregator.add_observation(day, category)

        daily = aggregator.finalize()

        assert len(daily) == 1
        assert daily[0].total == 6
        assert daily[0].counts == {
            Category.LINUX: 3,
            Category.DARWIN: 2,
            Category.WINDOWS: 1,
            Category.SOURCE: 0,
            Category.UNKNOWN: 0,
        }

    def test_same_date_different_time_merges(self, aggregator):
        aggregator.add_observation(datetime(2024, 1, 1, 0, 0, 1), Category.LINUX)
        aggregator.add_observation(datetime(2024, 1, 1, 23, 59, 59), Category.LINUX)
        aggregator.add_observation(date(2024, 1, 1), Category.LINUX)

        assert len(aggregator) == 1
        assert aggregator.finalize()[0].total == 3

    def test_finalize_sorted_ascending(self, aggregator):
        """Finalized sequence tăng dần, không trùng key."""
        days = [date(2024, 1, 5), date(2023, 12, 31), date(2024, 1, 2), date(2024, 1, 5)]
        for day in days:
            aggregator.add_observation(day, Category.LINUX)

        daily = aggregator.finalize()
        keys = [s.period_start for s in daily]

        assert keys == [date(2023, 12, 31), date(2024, 1, 2), date(2024, 1, 5)]
        assert all(a < b for a, b in zip(keys, keys[1:]))

    def test_finalize_idempotent(self, aggregator):
        aggregator.add_observation(date(2024, 1, 2), Category.DARWIN)
        aggregator.add_observation(date(2024, 1, 1), Category.LINUX)

        first = aggregator.finalize()
        second = aggregator.finalize()

        assert first == second
        assert [s.period_key for s in second] == ['2024-01-01', '2024-01-02']
        assert aggregator.is_finalized

    def test_add_after_finalize_rejected(self, aggregator):
        aggregator.add_observation(date(2024, 1, 1), Category.LINUX)
        aggregator.finalize()

        with pytest.raises(AggregatorFinalizedError):
            aggregator.add_observation(date(2024, 1, 2), Category.LINUX)

        assert len(aggregator.finalize()) == 1

    def test_empty_finalize(self, aggregator):
        assert aggregator.finalize() == []

    def test_instances_independent(self):
        a = EntryAggregator()
        b = EntryAggregator()
        a.add_observation(date(2024, 1, 1), Category.LINUX)

        assert len(a) == 1
        assert len(b) == 0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
