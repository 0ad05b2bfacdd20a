"""
Aggregation Module
==================
Tổng hợp các lượt tải theo period.

Classes:
- PeriodSummary: Tổng và counts theo Category của một period
- EntryAggregator: Gom observations theo ngày, finalize thành list đã sort

Functions:
- rebucket_by_week: Daily → weekly (tuần bắt đầu Chủ nhật)
- rebucket_by_interval: Daily → bucket N ngày
"""

from .aggregator import EntryAggregator, normalize_date
from .rebucket import (
    MONDAY,
    SUNDAY,
    rebucket,
    rebucket_by_interval,
    rebucket_by_week,
    week_start
)
from .summary import PeriodSummary

__all__ = [
    'EntryAggregator',
    'normalize_date',
    'PeriodSummary',
    'MONDAY',
    'SUNDAY',
    'rebucket',
    'rebucket_by_interval',
    'rebucket_by_week',
    'week_start',
]
