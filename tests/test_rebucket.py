"""
Test Rebucket Module
====================
Unit tests cho weekly / N-day rebucketing.
"""

import pytest
from datetime import date, timedelta
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cfdownloads.aggregation.rebucket import (
    MONDAY,
    SUNDAY,
    rebucket_by_interval,
    rebucket_by_week,
    week_start
)
from cfdownloads.aggregation.summary import PeriodSummary
from cfdownloads.data.classifier import Category


def make_daily(start, days, category=Category.LINUX, per_day=1):
    """Daily summaries liên tiếp, mỗi ngày per_day lượt tải."""
    result = []
    for i in range(days):
        summary = PeriodSummary(start + timedelta(days=i))
        for _ in range(per_day):
            summary.add_one(category)
        result.append(summary)
    return result


class TestWeekStart:

    def test_sunday_start(self):
        """2024-01-01 là thứ Hai → tuần bắt đầu 2023-12-31 (Chủ nhật)."""
        assert week_start(date(2024, 1, 1)) == date(2023, 12, 31)
        assert week_start(date(2024, 1, 6)) == date(2023, 12, 31)
        assert week_start(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_monday_start(self):
        assert week_start(date(2024, 1, 7), MONDAY) == date(2024, 1, 1)
        assert week_start(date(2024, 1, 1), MONDAY) == date(2024, 1, 1)

    def test_invalid_first_weekday(self):
        with pytest.raises(ValueError):
            week_start(date(2024, 1, 1), 7)


class TestRebucketByWeek:
    """Test cases cho rebucket_by_week."""

    def test_week_boundary(self):
        """Jan 1-7 2024, mỗi ngày total=1 → [2023-12-31: 6, 2024-01-07: 1]."""
        daily = make_daily(date(2024, 1, 1), 7)

        weekly = rebucket_by_week(daily, SUNDAY)

        assert [(w.period_start, w.total) for w in weekly] == [
            (date(2023, 12, 31), 6),
            (date(2024, 1, 7), 1),
        ]

    def test_monday_convention(self):
        weekly = rebucket_by_week(make_daily(date(2024, 1, 1), 8), MONDAY)

        assert [(w.period_key, w.total) for w in weekly] == [('2024-01-01', 7), ('2024-01-08', 1)]

    def test_category_counts_summed(self):
        daily = make_daily(date(2024, 1, 7), 2, Category.DARWIN, per_day=2)
        daily[1].add_one(Category.SOURCE)

        weekly = rebucket_by_week(daily)

        assert len(weekly) == 1
        assert weekly[0].total == 5
        assert weekly[0].count(Category.DARWIN) == 4
        assert weekly[0].count(Category.SOURCE) == 1
        assert weekly[0].total == sum(weekly[0].counts.values())

    def test_gaps_not_zero_filled(self):
        """Tuần không có dữ liệu không xuất hiện trong kết quả."""
        daily = make_daily(date(2024, 1, 1), 1) + make_daily(date(2024, 2, 1), 1)

        weekly = rebucket_by_week(daily)

        assert [w.period_start for w in weekly] == [date(2023, 12, 31), date(2024, 1, 28)]

    def test_input_not_mutated(self):
        daily = make_daily(date(2024, 1, 1), 3)

        rebucket_by_week(daily)

        assert [d.total for d in daily] == [1, 1, 1]

    def test_empty_input(self):
        assert rebucket_by_week([]) == []

    def test_unsorted_input_rejected(self):
        daily = make_daily(date(2024, 1, 1), 3)
        daily.reverse()

        with pytest.raises(ValueError):
            rebucket_by_week(daily)


class TestRebucketByInterval:
    """Test cases cho rebucket_by_interval."""

    def test_aligned_to_first_date(self):
        daily = make_daily(date(2024, 1, 3), 10)

        buckets = rebucket_by_interval(daily, 4)

        assert [(b.period_start, b.total) for b in buckets] == [
            (date(2024, 1, 3), 4),
            (date(2024, 1, 7), 4),
            (date(2024, 1, 11), 2),
        ]

    def test_custom_origin(self):
        daily = make_daily(date(2024, 1, 3), 4)

        buckets = rebucket_by_interval(daily, 2, origin=date(2024, 1, 1))

        assert [(b.period_start, b.total) for b in buckets] == [
            (date(2024, 1, 3), 2),
            (date(2024, 1, 5), 2),
        ]

    def test_one_day_interval_is_identity(self):
        daily = make_daily(date(2024, 1, 1), 3)

        buckets = rebucket_by_interval(daily, 1)

        assert [(b.period_start, b.total) for b in buckets] == [(d.period_start, 1) for d in daily]

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            rebucket_by_interval(make_daily(date(2024, 1, 1), 1), 0)

    def test_empty_input(self):
        assert rebucket_by_interval([], 7) == []


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
