"""
HTML Table Renderer
===================
Render một list PeriodSummary thành bảng HTML (mới nhất trước).

Renderer chỉ đọc dữ liệu đã finalize, không phụ thuộc ngược vào aggregator.
"""

import html
from dataclasses import dataclass, field
from typing import Callable, List

import pandas as pd

from ..aggregation.summary import PeriodSummary
from ..data.classifier import DISPLAY_CATEGORIES

RowFormatter = Callable[[PeriodSummary], List[int]]

DEFAULT_TITLES = ['Total'] + [c.title for c in DISPLAY_CATEGORIES]


def download_row(summary: PeriodSummary) -> List[int]:
    """[Total, Linux, Darwin, Windows, Source]. Unknown chỉ nằm trong Total."""
    return [summary.total] + [summary.count(c) for c in DISPLAY_CATEGORIES]


@dataclass
class RenderSpec:
    """
    Mô tả một bảng / chart.

    Attributes:
        title: Tiêu đề (vd: "Daily downloads")
        data: Summaries tăng dần theo ngày
        rows: Số period mới nhất được hiển thị
        time_format: strftime format cho cột Date
        titles: Tên các cột dữ liệu
        formatter: Hàm summary → list giá trị theo titles
    """
    title: str
    data: List[PeriodSummary]
    rows: int = 10
    time_format: str = '%Y-%m-%d'
    titles: List[str] = field(default_factory=lambda: list(DEFAULT_TITLES))
    formatter: RowFormatter = download_row

    def to_frame(self) -> pd.DataFrame:
        return summaries_to_frame(self.data, self.titles, self.formatter)


def summaries_to_frame(
    summaries: List[PeriodSummary],
    titles: List[str] = None,
    formatter: RowFormatter = download_row
) -> pd.DataFrame:
    """
    Chuyển summaries thành DataFrame.

    Returns:
        DataFrame với DatetimeIndex tên 'Date', mỗi title là một cột
    """
    titles = list(DEFAULT_TITLES if titles is None else titles)
    index = pd.DatetimeIndex([pd.Timestamp(s.period_start) for s in summaries], name='Date')
    rows = [formatter(s) for s in summaries]
    return pd.DataFrame(rows, index=index, columns=titles)


def render_html(spec: RenderSpec) -> str:
    """
    Render bảng HTML: title + các period mới nhất (tối đa spec.rows).
    """
    frame = spec.to_frame()
    newest = frame.iloc[::-1].head(max(spec.rows, 0))

    table = newest.copy()
    table.index = newest.index.strftime(spec.time_format)
    table = table.rename_axis('Date').reset_index()

    body = table.to_html(index=False, border=1, justify='left')
    body = body.replace('<table ', '<table style="border-collapse:collapse" ', 1)

    return f"<h3>{html.escape(spec.title)}</h3>\n{body}\n<br>\n"
