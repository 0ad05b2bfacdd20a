"""
Log Source Walker
=================
Liệt kê và giải nén các file log *.gz trong một thư mục.

- Chỉ đọc regular files có đuôi .gz (không theo symlink), theo thứ tự tên file
- File lỗi (gzip hỏng, không đọc được) → log và bỏ qua
- Không liệt kê được thư mục → SourceDirectoryError (fatal)
"""

import gzip
import logging
import os
import zlib
from typing import Callable, Iterator, List, Tuple

from tqdm import tqdm

from ..errors import LogFileError, SourceDirectoryError

logger = logging.getLogger(__name__)

LOG_SUFFIX = '.gz'


class LogSourceWalker:
    """
    Đọc tất cả các dòng của các file gzip trong một thư mục.

    Attributes:
        directory: Thư mục chứa logs
        encoding: Encoding của file (mặc định utf-8, lỗi thì replace)
        show_progress: Hiển thị progress bar theo file
        files_read / files_failed: Thống kê sau khi đọc

    Usage:
        >>> walker = LogSourceWalker('logs/')
        >>> walker.walk(lambda filename, line_num, line: print(line))
        >>> print(walker.get_stats())
    """

    def __init__(self, directory: str, encoding: str = 'utf-8', show_progress: bool = False):
        self.directory = directory
        self.encoding = encoding
        self.show_progress = show_progress
        self.files_read = 0
        self.files_failed: List[Tuple[str, str]] = []

    def list_files(self) -> List[str]:
        """
        Liệt kê các file .gz trong thư mục (không đệ quy).

        Raises:
            SourceDirectoryError: Nếu thư mục không tồn tại / không đọc được
        """
        try:
            entries = sorted(os.scandir(self.directory), key=lambda e: e.name)
        except OSError as e:
            raise SourceDirectoryError(f"could not list {self.directory!r}: {e}") from e

        return [
            entry.path for entry in entries
            if entry.name.endswith(LOG_SUFFIX) and entry.is_file(follow_symlinks=False)
        ]

    def read_file(self, path: str) -> Iterator[Tuple[int, str]]:
        """
        Yield (line_num, line) của một file gzip.

        Raises:
            LogFileError: Nếu file không mở / giải nén được
        """
        try:
            with gzip.open(path, 'rt', encoding=self.encoding, errors='replace') as f:
                for line_num, line in enumerate(f, 1):
                    yield line_num, line
        except (OSError, EOFError, zlib.error) as e:
            raise LogFileError(path, e) from e

    def walk(self, handle_line: Callable[[str, int, str], None]) -> int:
        """
        Đọc toàn bộ thư mục, gọi handle_line(filename, line_num, line) cho mỗi dòng.

        Lỗi của từng file không làm dừng việc đọc các file còn lại.
        Các dòng đã đọc trước khi file bị lỗi vẫn được giữ.

        Returns:
            Số file đọc thành công
        """
        files = self.list_files()
        logger.info("Found %d log files in %s", len(files), self.directory)

        iterator = tqdm(files, desc="Reading logs", unit="file") if self.show_progress else files

        for path in iterator:
            filename = os.path.basename(path)
            try:
                for line_num, line in self.read_file(path):
                    handle_line(filename, line_num, line)
            except LogFileError as e:
                logger.error("error adding %s: %s", filename, e.cause)
                self.files_failed.append((filename, str(e.cause)))
                continue
            self.files_read += 1

        return self.files_read

    def get_stats(self) -> dict:
        return {
            'files_read': self.files_read,
            'files_failed': len(self.files_failed),
        }

