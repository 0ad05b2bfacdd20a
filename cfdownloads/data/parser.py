"""
CloudFront Log Parser
=====================
Module parse CloudFront access logs (định dạng tab-separated).

Định dạng log (Web distribution, mỗi dòng một request):
    1 date          2 time             3 x-edge-location   4 sc-bytes
    5 c-ip          6 cs-method        7 cs(Host)          8 cs-uri-stem
    9 sc-status     10 cs(Referer)     11 cs(User-Agent)   12 cs-uri-query
    13 cs(Cookie)   14 x-edge-result-type                  15 x-edge-request-id
    16 x-host-header                   17 cs-protocol      18 cs-bytes
    19 time-taken   20 x-forwarded-for 21 ssl-protocol     22 ssl-cipher
    23 x-edge-response-result-type     24 cs-protocol-version

Chỉ dùng date, c-ip, cs-method, cs-uri-stem, sc-status.

Edge cases xử lý:
    - Dòng rỗng / comment (#Version, #Fields) → Skip, không phải lỗi
    - Ít hơn 23 fields → LogParseError
    - Cột date chỉ được validate bởi request_date(), sau khi request
      đã qua RequestFilter (dòng bị lọc không bao giờ là lỗi)
    - Nhiều hơn 23 fields → OK (AWS có thể thêm cột mới)
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..errors import LogParseError


COMMENT_MARKER = '#'
FIELD_SEPARATOR = '\t'
MIN_FIELDS = 23
DATE_FORMAT = '%Y-%m-%d'

# Vị trí các cột (0-based)
DATE_FIELD = 0
CLIENT_IP_FIELD = 4
METHOD_FIELD = 5
PATH_FIELD = 7
STATUS_FIELD = 8

DEFAULT_BINARY_PREFIX = '/cockroach-'


@dataclass(frozen=True)
class ParsedRequest:
    """Các fields cần thiết của một request đã parse (date còn ở dạng chuỗi)."""
    raw_date: str
    client_ip: str
    method: str
    request_path: str
    status_code: str


class SkipReason(Enum):
    """Lý do một request hợp lệ không được tính."""
    METHOD = "method"
    STATUS = "status"
    PATH = "path"
    BLOCKED_IP = "blocked_ip"


class CloudFrontLogParser:
    """
    Parser cho CloudFront access logs.

    Attributes:
        parse_errors (List): Mẫu các dòng lỗi (line_num, content, reason)
        stats (Dict): Thống kê parsing (total, parsed, comments, failed)
        max_errors (int): Số dòng lỗi tối đa được giữ lại

    Usage:
        >>> parser = CloudFrontLogParser()
        >>> request = parser.parse_line(line)
        >>> print(parser.get_stats())
    """

    def __init__(self, max_errors: int = 100):
        self.max_errors = max_errors
        self.parse_errors: List[Tuple[int, str, str]] = []
        self.stats = {'total': 0, 'parsed': 0, 'comments': 0, 'failed': 0}

    def reset_stats(self):
        """Reset thống kê về trạng thái ban đầu."""
        self.parse_errors = []
        self.stats = {'total': 0, 'parsed': 0, 'comments': 0, 'failed': 0}

    def parse_date(self, date_str: str) -> date:
        """
        Parse cột date từ định dạng: 2024-01-31

        Raises:
            ValueError: Nếu format không đúng
        """
        return datetime.strptime(date_str, DATE_FORMAT).date()

    def parse_line(self, line: str, line_num: int = 0) -> Optional[ParsedRequest]:
        """
        Parse một dòng log.

        Args:
            line: Dòng log cần parse (có thể còn newline ở cuối)
            line_num: Số thứ tự dòng (để debug)

        Returns:
            ParsedRequest, hoặc None nếu là dòng rỗng / comment

        Raises:
            LogParseError: Nếu dòng không đủ fields
        """
        self.stats['total'] += 1

        line = line.rstrip('\r\n')
        if not line or line.startswith(COMMENT_MARKER):
            self.stats['comments'] += 1
            return None

        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < MIN_FIELDS:
            self._record_error(line_num, line, 'insufficient fields')
            raise LogParseError(
                f"insufficient fields: found {len(parts)}, need {MIN_FIELDS}",
                line=line,
                field_count=len(parts),
            )

        self.stats['parsed'] += 1

        return ParsedRequest(
            raw_date=parts[DATE_FIELD],
            client_ip=parts[CLIENT_IP_FIELD],
            method=parts[METHOD_FIELD],
            request_path=parts[PATH_FIELD],
            status_code=parts[STATUS_FIELD],
        )

    def request_date(self, request: ParsedRequest, line: str = '', line_num: int = 0) -> date:
        """
        Parse date của một request đã qua RequestFilter.

        Args:
            request: Kết quả của parse_line
            line: Dòng log gốc (để báo lỗi)
            line_num: Số thứ tự dòng

        Raises:
            LogParseError: Nếu date sai format
        """
        try:
            return self.parse_date(request.raw_date)
        except ValueError:
            line = line.rstrip('\r\n')
            # parse_line đã tính dòng này là parsed
            self.stats['parsed'] -= 1
            self._record_error(line_num, line, 'invalid date')
            raise LogParseError(f"invalid date {request.raw_date!r}", line=line)

    def _record_error(self, line_num: int, line: str, reason: str):
        self.stats['failed'] += 1
        if len(self.parse_errors) < self.max_errors:
            self.parse_errors.append((line_num, line[:100], reason))

    def get_parse_errors(self, max_errors: int = 100) -> List[Tuple[int, str, str]]:
        """Lấy danh sách các dòng parse lỗi."""
        return self.parse_errors[:max_errors]

    def get_stats(self) -> Dict[str, Any]:
        """
        Lấy thống kê parsing.

        Returns:
            Dict với total, parsed, comments, failed, success_rate
        """
        data_lines = self.stats['parsed'] + self.stats['failed']
        success_rate = self.stats['parsed'] / data_lines * 100 if data_lines > 0 else 0
        return {
            **self.stats,
            'success_rate': success_rate
        }


@dataclass
class RequestFilter:
    """
    Lọc các request không phải là một lượt tải binary hoàn chỉnh.

    Attributes:
        binary_prefix: Prefix của path binary (vd: /cockroach-)
        blocklist: Các client IP bị loại (traffic nội bộ / test)
    """
    binary_prefix: str = DEFAULT_BINARY_PREFIX
    blocklist: FrozenSet[str] = field(default_factory=frozenset)

    def should_skip(self, request: ParsedRequest) -> Optional[SkipReason]:
        """
        Trả về lý do skip, hoặc None nếu request được tính.

        Chỉ lấy full successful responses: 206 (partial content), 3xx/4xx
        và 000 (client đóng connection trước khi có response) đều bị bỏ.
        """
        if request.method != 'GET':
            return SkipReason.METHOD
        if request.status_code != '200':
            return SkipReason.STATUS
        if not request.request_path.startswith(self.binary_prefix):
            return SkipReason.PATH
        if request.client_ip in self.blocklist:
            return SkipReason.BLOCKED_IP
        return None

    def accepts(self, request: ParsedRequest) -> bool:
        return self.should_skip(request) is None


def parse_lines(lines: Iterable[str]) -> List[ParsedRequest]:
    """
    Hàm tiện ích parse nhanh một list dòng, bỏ qua dòng lỗi
    (thiếu fields hoặc date sai format). Không áp dụng RequestFilter.

    Hữu ích cho việc kiểm tra format và debug.
    """
    parser = CloudFrontLogParser()
    records = []
    for line_num, line in enumerate(lines, 1):
        try:
            parsed = parser.parse_line(line, line_num)
            if parsed:
                parser.request_date(parsed, line, line_num)
        except LogParseError:
            continue
        if parsed:
            records.append(parsed)
    return records
