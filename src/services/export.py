"""
CSV export of the filtered submission list.
"""

import csv
import io
import re
from datetime import date

from core.config import CSV_HEADERS
from models.records import Submission

LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def flatten_value(value) -> str:
    """Collapse embedded line breaks so each record stays on one line."""
    if value is None:
        return ""
    return LINE_BREAKS.sub(" ", str(value))


def submissions_to_csv(rows: list[Submission]) -> str:
    """Header plus one fully quoted line per submission, no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(
            [
                flatten_value(row.get(key))
                for key in ("name", "email", "status", "website", "decision_reason")
            ]
        )
    return buffer.getvalue().rstrip("\n")


def export_filename(event_code: str, on_date: date) -> str:
    """e.g. workshop-ABC123-2025-11-07.csv"""
    return f"workshop-{event_code}-{on_date.isoformat()}.csv"
