"""
Command Line Interface
======================
Đọc CloudFront logs, ghi HTML summary + charts, gửi email (optional).

Usage:
    python -m cfdownloads --dir logs/ --blacklist 10.0.0.1,10.0.0.2 \\
        --email-from bot@example.com --email-to team@example.com \\
        --email-host smtp.example.com

Exit codes:
    0: thành công
    1: fatal error (thư mục log, output, render, email)
    2: sai tham số (argparse)
"""

import argparse
import logging
import sys

from .config import ReportConfig
from .data.parser import DEFAULT_BINARY_PREFIX
from .errors import FatalError
from .pipeline import DownloadStatsPipeline
from .reporting.mailer import send_report
from .reporting.report import build_report

logger = logging.getLogger(__name__)


def prep_logging(verbose: int = 0, quiet: bool = False):
    """Cấu hình root logger."""
    if quiet:
        level = logging.ERROR
    else:
        level = logging.DEBUG if verbose > 0 else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        force=True
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cfdownloads',
        description="Binary download statistics from gzipped CloudFront access logs"
    )
    parser.add_argument("--dir", required=True, help="Directory containing gzipped aws logs")
    parser.add_argument("--blacklist", default="", help="Comma-separated list of client IPs to ignore")
    parser.add_argument("--binary-prefix", default=DEFAULT_BINARY_PREFIX, help="Path prefix of binary downloads")

    output = parser.add_argument_group("output")
    output.add_argument("--summary-html", default="summary.html", help="Filename for html summary")
    output.add_argument("--daily-png", default="daily.png", help="Filename for daily png chart")
    output.add_argument("--weekly-png", default="weekly.png", help="Filename for weekly png chart")
    output.add_argument("--daily-rows", type=int, default=10, help="Number of days in the html table")
    output.add_argument("--weekly-rows", type=int, default=10, help="Number of weeks in the html table")
    output.add_argument("--daily-chart-periods", type=int, default=60, help="Number of days on the daily chart")
    output.add_argument("--weekly-chart-periods", type=int, default=52, help="Number of weeks on the weekly chart")

    email = parser.add_argument_group("email")
    email.add_argument("--email-from", default="", help="SMTP server from address")
    email.add_argument("--email-to", default="", help="Comma-separated SMTP to addresses")
    email.add_argument("--email-host", default="", help="SMTP server name")
    email.add_argument("--email-port", type=int, default=587, help="SMTP server port")
    email.add_argument("--email-user", default="", help="SMTP server username")
    email.add_argument("--email-password", default="",
                       help="SMTP server password (default: $CFDOWNLOADS_SMTP_PASSWORD)")

    parser.add_argument("--progress", action="store_true", help="Show a progress bar while reading files")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def run(config: ReportConfig) -> int:
    """
    Chạy một lần: ingestion → report → email.

    Raises:
        FatalError: Để caller quyết định exit code
    """
    pipeline = DownloadStatsPipeline(config.source)
    result = pipeline.run()

    report = build_report(result.daily, result.weekly, config.output)

    if config.email.enabled:
        send_report(config.email, report.email_html, report.images)
    else:
        logger.info("Email not configured, report not sent")

    return result.stats.accepted


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    prep_logging(args.verbose, args.quiet)

    config = ReportConfig.from_args(args)
    try:
        run(config)
    except FatalError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
