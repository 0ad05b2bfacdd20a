"""
Entry Aggregator
================
Gom các observation (date, category) thành PeriodSummary theo ngày.

Vòng đời:
    1. add_observation() nhiều lần (ingestion)
    2. finalize() một lần → list đã sort theo ngày tăng dần
    3. Sau finalize, mọi add_observation() đều bị từ chối

Date được normalize về datetime.date, nên hai request cùng ngày
(khác giờ) luôn rơi vào cùng một bucket.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Union

from ..data.classifier import Category
from ..errors import AggregatorFinalizedError
from .summary import PeriodSummary

DateLike = Union[date, datetime, str]


def normalize_date(value: DateLike) -> date:
    """
    Đưa các kiểu date khác nhau về datetime.date.

    Args:
        value: date, datetime (kể cả pd.Timestamp) hoặc chuỗi YYYY-MM-DD

    Returns:
        datetime.date (bỏ phần giờ)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value, '%Y-%m-%d').date()
    raise TypeError(f"unsupported date type: {type(value).__name__}")


class EntryAggregator:
    """
    Aggregator sở hữu toàn bộ PeriodSummary trong một run.

    Mỗi instance độc lập, không có state dùng chung giữa các instance.

    Usage:
        >>> agg = EntryAggregator()
        >>> agg.add_observation(date(2024, 1, 1), Category.LINUX)
        >>> daily = agg.finalize()
    """

    def __init__(self):
        self._by_date: Dict[date, PeriodSummary] = {}
        self._ordered: Optional[List[PeriodSummary]] = None

    @property
    def is_finalized(self) -> bool:
        return self._ordered is not None

    def __len__(self) -> int:
        if self._ordered is not None:
            return len(self._ordered)
        return len(self._by_date)

    def add_observation(self, day: DateLike, category: Category):
        """
        Thêm một lượt tải của category vào ngày day.

        Raises:
            AggregatorFinalizedError: Nếu đã finalize
        """
        if self.is_finalized:
            raise AggregatorFinalizedError("cannot add observations after finalize()")

        key = normalize_date(day)
        summary = self._by_date.get(key)
        if summary is None:
            summary = PeriodSummary(period_start=key)
            self._by_date[key] = summary
        summary.add_one(category)

    def finalize(self) -> List[PeriodSummary]:
        """
        Sort các summary theo ngày tăng dần và khóa aggregator.

        Gọi nhiều lần trả về cùng một sequence.
        """
        if self._ordered is None:
            self._ordered = sorted(self._by_date.values(), key=lambda s: s.period_start)
            self._by_date = {}
        return list(self._ordered)

    def __str__(self) -> str:
        summaries = self._ordered if self._ordered is not None else self._by_date.values()
        return "\n".join(str(s) for s in summaries)
