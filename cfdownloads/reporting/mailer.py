"""
Email Report
============
Gửi report HTML kèm chart (inline, qua Content-ID) bằng SMTP.

- Port 465 → SMTP_SSL
- Port 587 → STARTTLS
- Có username → login
"""

import logging
import os
import smtplib
from datetime import datetime
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Dict

from ..config import EmailConfig
from ..errors import ReportDeliveryError

logger = logging.getLogger(__name__)


def build_message(
    config: EmailConfig,
    body_html: str,
    inline_images: Dict[str, str],
    now: datetime = None
) -> MIMEMultipart:
    """
    Tạo email với HTML body và inline images.

    Args:
        config: EmailConfig
        body_html: HTML, tham chiếu ảnh bằng src="cid:<cid>"
        inline_images: {cid: đường dẫn PNG}
        now: Thời điểm dùng cho subject (mặc định: bây giờ)

    Raises:
        ReportDeliveryError: Nếu không đọc được ảnh
    """
    now = now or datetime.now()

    msg = MIMEMultipart('related')
    msg['From'] = config.sender
    msg['To'] = ', '.join(config.recipients)
    msg['Subject'] = now.strftime(config.subject_format)
    msg.attach(MIMEText(body_html, 'html', 'utf-8'))

    for cid, path in inline_images.items():
        try:
            with open(path, 'rb') as f:
                img = MIMEImage(f.read(), _subtype='png')
        except OSError as e:
            raise ReportDeliveryError(f"could not attach {path}: {e}") from e
        img.add_header('Content-ID', f'<{cid}>')
        img.add_header('Content-Disposition', 'inline', filename=os.path.basename(path))
        msg.attach(img)

    return msg


def send_message(config: EmailConfig, msg: MIMEMultipart):
    """
    Gửi message qua SMTP server trong config.

    Raises:
        ReportDeliveryError: Lỗi kết nối / xác thực / gửi
    """
    try:
        if int(config.port) == 465:
            server = smtplib.SMTP_SSL(config.host, int(config.port), timeout=config.timeout)
        else:
            server = smtplib.SMTP(config.host, int(config.port), timeout=config.timeout)
        with server:
            if int(config.port) == 587:
                server.starttls()
            if config.username:
                server.login(config.username, config.password)
            server.send_message(msg, from_addr=config.sender, to_addrs=list(config.recipients))
    except (smtplib.SMTPException, OSError) as e:
        raise ReportDeliveryError(f"could not send email: {e}") from e

    logger.info("Report sent to %s via %s:%s", ', '.join(config.recipients), config.host, config.port)


def send_report(config: EmailConfig, body_html: str, inline_images: Dict[str, str], now: datetime = None):
    """Build và gửi email report."""
    msg = build_message(config, body_html, inline_images, now=now)
    send_message(config, msg)
