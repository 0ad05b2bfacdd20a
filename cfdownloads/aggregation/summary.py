"""
Period Summary
==============
Số lượt tải của một period (ngày hoặc tuần), theo từng platform.

Invariant: total == sum(counts.values()) tại mọi thời điểm.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict

from ..data.classifier import Category

PERIOD_KEY_FORMAT = '%Y-%m-%d'


def _zero_counts() -> Dict[Category, int]:
    return {category: 0 for category in Category}


@dataclass
class PeriodSummary:
    """
    Tổng hợp của một period.

    Attributes:
        period_start: Ngày bắt đầu period
        total: Tổng số lượt tải (bao gồm cả Unknown)
        counts: Số lượt tải theo Category, mọi Category đều có mặt
    """
    period_start: date
    total: int = 0
    counts: Dict[Category, int] = field(default_factory=_zero_counts)

    @property
    def period_key(self) -> str:
        """Key dạng YYYY-MM-DD."""
        return self.period_start.strftime(PERIOD_KEY_FORMAT)

    def count(self, category: Category) -> int:
        return self.counts.get(category, 0)

    def add_one(self, category: Category):
        """Thêm một observation của category."""
        self.counts[category] = self.counts.get(category, 0) + 1
        self.total += 1

    def merge(self, other: 'PeriodSummary'):
        """Cộng total và counts của other vào summary này."""
        self.total += other.total
        for category, value in other.counts.items():
            self.counts[category] = self.counts.get(category, 0) + value

    def copy(self) -> 'PeriodSummary':
        return PeriodSummary(self.period_start, self.total, dict(self.counts))

    def as_dict(self) -> Dict[str, int]:
        """Dạng phẳng: {'date': ..., 'total': ..., 'linux': ..., ...}."""
        row = {'date': self.period_key, 'total': self.total}
        for category in Category:
            row[category.value] = self.count(category)
        return row

    def __str__(self) -> str:
        return f"{self.period_key}: {self.total}"
