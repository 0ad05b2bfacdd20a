"""
CLOUDFRONT BINARY DOWNLOADS
===========================
Thống kê số lượt tải binary từ CloudFront access logs (gzip),
phân loại theo platform và tổng hợp theo ngày / tuần.

Modules:
- data: Walker, parser và classifier cho log files
- aggregation: PeriodSummary, EntryAggregator, rebucket theo tuần
- reporting: HTML table, chart PNG, email report
- pipeline: Chạy toàn bộ ingestion cho một thư mục log
- cli: Command line entry point
"""

__version__ = "1.0.0"
__author__ = "CloudFront Downloads Team"
