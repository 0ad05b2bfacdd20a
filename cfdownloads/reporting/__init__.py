"""
Reporting Module
================
Render kết quả đã finalize thành HTML, PNG chart và email.

Classes:
- RenderSpec: Mô tả một bảng / chart
- Report: HTML + danh sách chart đã vẽ

Functions:
- render_html, render_chart, build_report, send_report
"""

from .chart import render_chart
from .mailer import build_message, send_report
from .report import Report, build_report
from .table import RenderSpec, download_row, render_html, summaries_to_frame

__all__ = [
    'render_chart',
    'build_message',
    'send_report',
    'Report',
    'build_report',
    'RenderSpec',
    'download_row',
    'render_html',
    'summaries_to_frame',
]
