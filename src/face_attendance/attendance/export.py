from __future__ import annotations

import csv
import io
from typing import Iterable, Optional

from ..core.constants import DATE_FORMAT, TIME_OF_DAY_FORMAT
from .model import DailySummary

REPORT_COLUMNS = ["Date", "Clock in", "Clock out", "Lateness"]


def lateness_label(late_minutes: Optional[int]) -> str:
    if late_minutes is None:
        return "N/A"
    if late_minutes > 0:
        return f"{late_minutes} min"
    return "On time"


def summary_row(summary: DailySummary) -> list[str]:
    return [
        summary.date.strftime(DATE_FORMAT),
        summary.first_clock_in.strftime(TIME_OF_DAY_FORMAT) if summary.first_clock_in else "-",
        summary.last_clock_out.strftime(TIME_OF_DAY_FORMAT) if summary.last_clock_out else "-",
        lateness_label(summary.late_minutes),
    ]


def summaries_to_csv(summaries: Iterable[DailySummary]) -> str:
    """Render daily summaries as the attendance report table."""

    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(REPORT_COLUMNS)
    for summary in summaries:
        writer.writerow(summary_row(summary))
    return out.getvalue()
