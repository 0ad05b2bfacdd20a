"""
Errors
======
Phân loại lỗi của hệ thống.

Recoverable (log và tiếp tục):
    - LogParseError: dòng log bị malformed
    - LogFileError: file gzip không đọc được

Fatal (dừng run, cli trả về exit code khác 0):
    - SourceDirectoryError
    - ReportRenderError
    - ReportDeliveryError

Skip conditions (comment, non-GET, non-200, ...) không phải là lỗi.
"""

from typing import Optional


class CFDownloadsError(Exception):
    """Base class cho tất cả lỗi của package."""


class LogParseError(CFDownloadsError):
    """
    Một dòng log không parse được.

    Attributes:
        reason: Mô tả ngắn lý do lỗi
        line: Nội dung dòng (đã cắt ngắn)
        field_count: Số fields tìm thấy (nếu có)
    """

    MAX_LINE_CHARS = 100

    def __init__(self, reason: str, line: str = "", field_count: Optional[int] = None):
        self.reason = reason
        self.line = line[:self.MAX_LINE_CHARS]
        self.field_count = field_count
        super().__init__(reason)


class LogFileError(CFDownloadsError):
    """Một file log không đọc được (không tồn tại, gzip hỏng, ...)."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"could not read {path}: {cause}")


class AggregatorFinalizedError(CFDownloadsError):
    """Gọi add_observation() sau khi finalize()."""


class FatalError(CFDownloadsError):
    """Lỗi khiến run phải dừng."""


class SourceDirectoryError(FatalError):
    """Không liệt kê được thư mục chứa logs."""


class ReportRenderError(FatalError):
    """Không render hoặc ghi được HTML / chart."""


class ReportDeliveryError(FatalError):
    """Không gửi được email report."""
