"""
Report Builder
==============
Ghép HTML tables và charts cho daily / weekly downloads.

Output:
    - summary_html: HTML document với một bảng cho mỗi granularity
    - daily_png, weekly_png: time-series charts
    - email_html: cùng nội dung, ảnh tham chiếu bằng cid:
"""

import html
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple

from ..aggregation.summary import PeriodSummary
from ..config import OutputConfig
from ..errors import ReportRenderError
from .chart import render_chart
from .table import RenderSpec, render_html

logger = logging.getLogger(__name__)

HTML_HEADER = '<!DOCTYPE html>\n<html>\n<head><meta charset="utf-8"><title>Binary downloads</title></head>\n<body>\n'
HTML_FOOTER = '</body>\n</html>\n'


@dataclass
class Report:
    """
    Kết quả render.

    Attributes:
        html: HTML document đã ghi ra summary_html
        email_html: HTML body cho email
        images: {cid: đường dẫn PNG} của các chart đã vẽ
    """
    html: str
    email_html: str
    images: Dict[str, str] = field(default_factory=dict)


def _section(spec: RenderSpec, chart_periods: int, chart_path: str, images: Dict[str, str]) -> Tuple[str, str]:
    """Render bảng, vẽ chart. Trả về (html cho file, html cho email)."""
    table_html = render_html(spec)
    if not spec.data:
        logger.warning("No data for %r, chart %s skipped", spec.title, chart_path)
        return table_html, table_html

    render_chart(replace(spec, rows=chart_periods), chart_path)
    cid = os.path.basename(chart_path)
    images[cid] = chart_path
    logger.info("Wrote %s", chart_path)

    img = f'<img src="cid:{cid}" alt="{html.escape(spec.title)}">\n'
    return table_html, table_html + img


def build_report(daily: List[PeriodSummary], weekly: List[PeriodSummary], output: OutputConfig) -> Report:
    """
    Render HTML summary và charts ra file.

    Raises:
        ReportRenderError: Không ghi được file output
    """
    images: Dict[str, str] = {}

    daily_spec = RenderSpec('Daily downloads', daily, rows=output.daily_rows)
    weekly_spec = RenderSpec('Weekly downloads', weekly, rows=output.weekly_rows)

    daily_file, daily_email = _section(daily_spec, output.daily_chart_periods, output.daily_png, images)
    weekly_file, weekly_email = _section(weekly_spec, output.weekly_chart_periods, output.weekly_png, images)

    document = HTML_HEADER + daily_file + weekly_file + HTML_FOOTER
    try:
        with open(output.summary_html, 'w', encoding='utf-8') as f:
            f.write(document)
    except OSError as e:
        raise ReportRenderError(f"could not create summary file {output.summary_html}: {e}") from e
    logger.info("Wrote %s", output.summary_html)

    return Report(html=document, email_html=daily_email + weekly_email, images=images)
