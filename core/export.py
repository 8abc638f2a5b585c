# core/export.py

"""
Serializers for exporting and importing tracker data.

- `to_flat_report()` and `to_csv()` produce the spreadsheet-friendly progress report:
  one row per (student, objective) pair.
- `to_json()` and `from_json()` round-trip the whole document as a portable snapshot.
"""

from __future__ import annotations

import json
from typing import Any

import core.formatters as formatters
from models.document import DeserializationError, TrackerDocument
from models.submission import SubmissionStatus

REPORT_FIELDS = (
    "student",
    "team",
    "objective",
    "week",
    "dueDate",
    "status",
    "notes",
    "evidenceUrl",
    "extraCount",
    "extraVerified",
)


def to_flat_report(document: TrackerDocument) -> list[dict[str, Any]]:
    """
    Flattens the document into report rows covering every (student, objective) pair.

    Args:
        document (TrackerDocument): The document to report on.

    Returns:
        A list of dictionaries keyed by `REPORT_FIELDS`. Rows are ordered by student
        first, then by objective, both in document order. Pairs without a submission
        report status "not_started", empty notes and link, and zero extras.
    """
    rows = []
    for student in document.students:
        for objective in document.objectives:
            submission = document.find_submission(student.id, objective.id)

            if submission is None:
                progress = (SubmissionStatus.NOT_STARTED.value, "", "", 0, 0)
            else:
                progress = (
                    submission.status.value,
                    submission.notes,
                    submission.evidence_url,
                    len(submission.extras),
                    submission.verified_extra_count,
                )

            values = (
                student.name,
                student.team,
                objective.title,
                objective.week_index,
                formatters.format_report_date(objective.due_date),
            ) + progress

            rows.append(dict(zip(REPORT_FIELDS, values)))

    return rows


def to_csv(rows: list[dict[str, Any]]) -> str:
    """
    Renders report rows as CSV text.

    The header is the keys of the first row joined by commas. Each value is
    JSON-encoded, so embedded commas, quotes, and newlines arrive escaped and every
    string is quoted. An empty row list yields an empty string.
    """
    if not rows:
        return ""

    keys = list(rows[0].keys())
    lines = [",".join(keys)]
    for row in rows:
        lines.append(
            ",".join(
                json.dumps(_blank_if_none(row.get(key)), ensure_ascii=False)
                for key in keys
            )
        )

    return "\n".join(lines)


def to_json(document: TrackerDocument, indent: int | None = 2) -> str:
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def from_json(text: str | bytes) -> TrackerDocument:
    """
    Parses a JSON snapshot into a `TrackerDocument`.

    Raises:
        DeserializationError: If the text is not valid JSON or not shaped like a tracker document.
    """
    try:
        data = json.loads(text)

    except (ValueError, TypeError, RecursionError) as e:
        raise DeserializationError(f"Failed to parse JSON data: {e}") from None

    return TrackerDocument.from_dict(data)


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value
