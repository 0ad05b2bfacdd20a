"""
Configuration
=============
Các dataclass cấu hình cho một run.

- SourceConfig: thư mục log, blocklist, binary prefix
- OutputConfig: tên file output và số period hiển thị
- EmailConfig: tham số SMTP (optional)
- ReportConfig: gom cả ba, build từ argparse namespace

Usage:
    >>> config = ReportConfig.from_args(args)
    >>> config.email.enabled
    False
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from .data.parser import DEFAULT_BINARY_PREFIX

SMTP_PASSWORD_ENV = 'CFDOWNLOADS_SMTP_PASSWORD'


def split_csv(value: Optional[str]) -> List[str]:
    """Tách chuỗi phân cách bởi dấu phẩy, bỏ khoảng trắng và phần tử rỗng."""
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def parse_blocklist(value: Optional[str]) -> FrozenSet[str]:
    """'1.2.3.4, 5.6.7.8' → frozenset({'1.2.3.4', '5.6.7.8'})"""
    return frozenset(split_csv(value))


@dataclass
class SourceConfig:
    """
    Cấu hình nguồn log.

    Attributes:
        directory: Thư mục chứa gzipped CloudFront logs
        blocklist: Client IPs bị loại (traffic nội bộ / test)
        binary_prefix: Prefix của path binary
        show_progress: Hiển thị tqdm progress bar
    """
    directory: str = ''
    blocklist: FrozenSet[str] = field(default_factory=frozenset)
    binary_prefix: str = DEFAULT_BINARY_PREFIX
    show_progress: bool = False


@dataclass
class OutputConfig:
    """
    Cấu hình output.

    Attributes:
        summary_html: File HTML summary
        daily_png / weekly_png: File chart
        daily_rows / weekly_rows: Số period mới nhất trong bảng HTML
        daily_chart_periods / weekly_chart_periods: Số period trên chart
    """
    summary_html: str = 'summary.html'
    daily_png: str = 'daily.png'
    weekly_png: str = 'weekly.png'
    daily_rows: int = 10
    weekly_rows: int = 10
    daily_chart_periods: int = 60   # ~2 tháng
    weekly_chart_periods: int = 52  # 1 năm


@dataclass
class EmailConfig:
    """
    Cấu hình gửi email report.

    Attributes:
        sender: Địa chỉ From
        recipients: Danh sách To
        host / port: SMTP server (587 → STARTTLS, 465 → SSL)
        username / password: SMTP credentials (optional)
        subject_format: strftime format cho subject
    """
    sender: str = ''
    recipients: List[str] = field(default_factory=list)
    host: str = ''
    port: int = 587
    username: str = ''
    password: str = ''
    subject_format: str = 'Binary downloads %Y-%m-%d'
    timeout: int = 30

    @property
    def enabled(self) -> bool:
        return bool(self.sender and self.recipients and self.host)


@dataclass
class ReportConfig:
    """Toàn bộ cấu hình của một run."""
    source: SourceConfig = field(default_factory=SourceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    email: EmailConfig = field(default_factory=EmailConfig)

    @classmethod
    def from_args(cls, args) -> 'ReportConfig':
        """Build từ argparse.Namespace (xem cli.build_arg_parser)."""
        source = SourceConfig(
            directory=args.dir,
            blocklist=parse_blocklist(args.blacklist),
            binary_prefix=args.binary_prefix,
            show_progress=args.progress,
        )
        output = OutputConfig(
            summary_html=args.summary_html,
            daily_png=args.daily_png,
            weekly_png=args.weekly_png,
            daily_rows=args.daily_rows,
            weekly_rows=args.weekly_rows,
            daily_chart_periods=args.daily_chart_periods,
            weekly_chart_periods=args.weekly_chart_periods,
        )
        email = EmailConfig(
            sender=args.email_from,
            recipients=split_csv(args.email_to),
            host=args.email_host,
            port=args.email_port,
            username=args.email_user,
            password=args.email_password or os.getenv(SMTP_PASSWORD_ENV, ''),
        )
        return cls(source=source, output=output, email=email)
