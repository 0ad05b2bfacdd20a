"""
Download Stats Pipeline
=======================
Chạy toàn bộ ingestion cho một thư mục log:

    Walker → Parser → RequestFilter → Classifier → EntryAggregator
           → finalize() → rebucket_by_week()

Error policy:
    - Dòng lỗi: log WARNING, đếm vào parse_errors, tiếp tục
    - File lỗi: log ERROR (trong walker), bỏ qua file, tiếp tục
    - Thư mục lỗi: SourceDirectoryError được raise lên caller

Usage:
    >>> pipeline = DownloadStatsPipeline(SourceConfig(directory='logs/'))
    >>> result = pipeline.run()
    >>> print(result.daily[-1], result.weekly[-1])
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .aggregation.aggregator import EntryAggregator
from .aggregation.rebucket import SUNDAY, rebucket_by_week
from .aggregation.summary import PeriodSummary
from .config import SourceConfig
from .data.classifier import Category, Classifier
from .data.parser import CloudFrontLogParser, RequestFilter, SkipReason
from .data.walker import LogSourceWalker
from .errors import LogParseError

logger = logging.getLogger(__name__)


@dataclass
class IngestStats:
    """Thống kê của một lần ingestion."""
    files_read: int = 0
    files_failed: int = 0
    lines_total: int = 0
    comments: int = 0
    parse_errors: int = 0
    accepted: int = 0
    skipped: Dict[SkipReason, int] = field(default_factory=lambda: {r: 0 for r in SkipReason})
    by_category: Dict[Category, int] = field(default_factory=lambda: {c: 0 for c in Category})

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def as_dict(self) -> Dict[str, int]:
        data = {
            'files_read': self.files_read,
            'files_failed': self.files_failed,
            'lines_total': self.lines_total,
            'comments': self.comments,
            'parse_errors': self.parse_errors,
            'accepted': self.accepted,
        }
        for reason, value in self.skipped.items():
            data[f'skipped_{reason.value}'] = value
        for category, value in self.by_category.items():
            data[f'category_{category.value}'] = value
        return data


@dataclass
class PipelineResult:
    """Kết quả của một run: daily, weekly và thống kê."""
    daily: List[PeriodSummary]
    weekly: List[PeriodSummary]
    stats: IngestStats


class DownloadStatsPipeline:
    """
    Pipeline ingestion một lần (single-threaded batch).

    Attributes:
        config: SourceConfig
        parser: CloudFrontLogParser
        request_filter: RequestFilter (prefix + blocklist)
        classifier: Classifier
        aggregator: EntryAggregator (một instance cho mỗi pipeline)
        stats: IngestStats
    """

    def __init__(
        self,
        config: SourceConfig,
        classifier: Optional[Classifier] = None,
        first_weekday: int = SUNDAY
    ):
        self.config = config
        self.parser = CloudFrontLogParser()
        self.request_filter = RequestFilter(
            binary_prefix=config.binary_prefix,
            blocklist=frozenset(config.blocklist)
        )
        self.classifier = classifier or Classifier()
        self.aggregator = EntryAggregator()
        self.first_weekday = first_weekday
        self.stats = IngestStats()

    def process_line(self, line: str, source: str = '<memory>', line_num: int = 0) -> bool:
        """
        Xử lý một dòng log.

        Returns:
            True nếu dòng được tính là một lượt tải
        """
        self.stats.lines_total += 1

        try:
            request = self.parser.parse_line(line, line_num)
        except LogParseError as e:
            self._parse_error(e, source, line_num)
            return False

        if request is None:
            self.stats.comments += 1
            return False

        reason = self.request_filter.should_skip(request)
        if reason is not None:
            self.stats.skipped[reason] += 1
            return False

        try:
            request_date = self.parser.request_date(request, line, line_num)
        except LogParseError as e:
            self._parse_error(e, source, line_num)
            return False

        category = self.classifier.classify(request.request_path)
        self.aggregator.add_observation(request_date, category)
        self.stats.accepted += 1
        self.stats.by_category[category] += 1
        return True

    def _parse_error(self, error: LogParseError, source: str, line_num: int):
        self.stats.parse_errors += 1
        logger.warning("%s:%d: %s (%r)", source, line_num, error.reason, error.line)

    def process_lines(self, lines: Iterable[str], source: str = '<memory>') -> int:
        """Xử lý một iterable các dòng. Trả về số lượt tải được tính."""
        accepted = 0
        for line_num, line in enumerate(lines, 1):
            if self.process_line(line, source, line_num):
                accepted += 1
        return accepted

    def ingest_directory(self):
        """
        Đọc toàn bộ thư mục log.

        Raises:
            SourceDirectoryError: Nếu không liệt kê được thư mục
        """
        walker = LogSourceWalker(self.config.directory, show_progress=self.config.show_progress)
        walker.walk(lambda filename, line_num, line: self.process_line(line, filename, line_num))
        self.stats.files_read += walker.files_read
        self.stats.files_failed += len(walker.files_failed)

    def finish(self) -> PipelineResult:
        """Finalize aggregator và build weekly summaries."""
        daily = self.aggregator.finalize()
        weekly = rebucket_by_week(daily, self.first_weekday)
        self.log_stats()
        return PipelineResult(daily=daily, weekly=weekly, stats=self.stats)

    def run(self) -> PipelineResult:
        self.ingest_directory()
        return self.finish()

    def log_stats(self):
        s = self.stats
        logger.info(
            "Ingestion done: %d files read, %d failed, %d lines, %d accepted, "
            "%d skipped, %d parse errors",
            s.files_read, s.files_failed, s.lines_total, s.accepted,
            s.skipped_total, s.parse_errors
        )
        for reason, value in s.skipped.items():
            logger.debug("  skipped (%s): %d", reason.value, value)
        for category, value in s.by_category.items():
            logger.debug("  %s: %d", category.value, value)
