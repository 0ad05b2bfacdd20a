"""
Period Rebucketer
=================
Gộp các daily summaries thành các period lớn hơn (tuần, N ngày).

Thuật toán (một lần duyệt):
    - Duyệt daily summaries theo ngày tăng dần
    - Tính bucket_start cho từng ngày
    - Khi bucket_start thay đổi → flush accumulator cũ, tạo accumulator mới
    - Bucket không có ngày nào thì không được tạo (không fill 0)

Week convention: tuần bắt đầu từ Chủ nhật (SUNDAY), giống calendar US.
"""

from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional

from .summary import PeriodSummary

# Theo date.weekday(): Monday=0 ... Sunday=6
MONDAY = 0
SUNDAY = 6

BucketStartFn = Callable[[date], date]


def week_start(day: date, first_weekday: int = SUNDAY) -> date:
    """
    Ngày đầu tuần chứa day.

    Args:
        day: Ngày bất kỳ
        first_weekday: Ngày đầu tuần (MONDAY=0 ... SUNDAY=6)

    Example:
        >>> week_start(date(2024, 1, 1))  # Monday
        datetime.date(2023, 12, 31)
    """
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday phải trong [0, 6], nhận {first_weekday}")
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def interval_start(day: date, days: int, origin: date) -> date:
    """Ngày đầu của bucket N ngày chứa day, căn theo origin."""
    offset = (day - origin).days % days
    return day - timedelta(days=offset)


def rebucket(summaries: Iterable[PeriodSummary], bucket_start_fn: BucketStartFn) -> List[PeriodSummary]:
    """
    Gộp các summary liên tiếp có cùng bucket_start.

    Input phải sort tăng dần theo period_start; input không bị sửa.

    Raises:
        ValueError: Nếu input không tăng dần
    """
    result: List[PeriodSummary] = []
    current: Optional[PeriodSummary] = None
    previous_day: Optional[date] = None

    for summary in summaries:
        day = summary.period_start
        if previous_day is not None and day <= previous_day:
            raise ValueError(f"summaries must be strictly ascending: {day} after {previous_day}")
        previous_day = day

        start = bucket_start_fn(day)
        if current is None or current.period_start != start:
            if current is not None:
                result.append(current)
            current = PeriodSummary(period_start=start)
        current.merge(summary)

    if current is not None:
        result.append(current)

    return result


def rebucket_by_week(daily: List[PeriodSummary], first_weekday: int = SUNDAY) -> List[PeriodSummary]:
    """Gộp daily summaries thành weekly summaries, key là ngày đầu tuần."""
    return rebucket(daily, lambda day: week_start(day, first_weekday))


def rebucket_by_interval(
    daily: List[PeriodSummary],
    days: int,
    origin: Optional[date] = None
) -> List[PeriodSummary]:
    """
    Gộp daily summaries thành các bucket N ngày.

    Args:
        daily: Daily summaries tăng dần
        days: Độ rộng bucket (>= 1)
        origin: Mốc căn bucket (mặc định: ngày đầu tiên có dữ liệu)
    """
    if days < 1:
        raise ValueError(f"days phải >= 1, nhận {days}")
    if not daily:
        return []
    if origin is None:
        origin = daily[0].period_start
    return rebucket(daily, lambda day: interval_start(day, days, origin))
