"""
Chart Renderer
==============
Vẽ time-series chart (PNG) cho total và từng platform.
"""

import logging
from typing import BinaryIO, Union

# Headless backend
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.dates import DateFormatter

from ..errors import ReportRenderError
from .table import RenderSpec

logging.getLogger("matplotlib").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def render_chart(spec: RenderSpec, output: Union[str, BinaryIO], figsize=(10, 4), dpi: int = 100):
    """
    Vẽ spec.rows period mới nhất thành line chart.

    Args:
        spec: RenderSpec (data tăng dần theo ngày)
        output: Đường dẫn file hoặc binary file object
        figsize: Kích thước figure (inches)
        dpi: Độ phân giải

    Raises:
        ReportRenderError: Không có dữ liệu hoặc không ghi được file
    """
    frame = spec.to_frame().tail(max(spec.rows, 1))
    if frame.empty:
        raise ReportRenderError(f"no data to chart for {spec.title!r}")

    fig, ax = plt.subplots(figsize=figsize)
    try:
        for column in frame.columns:
            ax.plot(frame.index, frame[column], label=column, linewidth=2 if column == 'Total' else 1)

        ax.set_title(spec.title)
        ax.set_ylabel('Downloads')
        ax.xaxis.set_major_formatter(DateFormatter(spec.time_format))
        ax.grid(axis='y', linestyle='--', alpha=0.3)
        ax.legend(loc='upper left')
        fig.autofmt_xdate()
        fig.tight_layout()

        fig.savefig(output, format='png', dpi=dpi)
    except Exception as e:
        raise ReportRenderError(f"failed to render {spec.title!r}: {e}") from e
    finally:
        plt.close(fig)

    logger.debug("Rendered chart %r with %d periods", spec.title, len(frame))
