# core/derivations.py

"""
Read-only views computed from a `TrackerDocument`.

Every function here is pure: it reads the document (or a slice of it) and returns
new values without touching tracker state, so views can be recomputed freely after
each commit.
"""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple

from core.utils import normalize
from models.document import TrackerDocument
from models.objective import Objective
from models.student import Student


class Completion(NamedTuple):
    done: int
    total: int
    pct: int


class OverviewRow(NamedTuple):
    student: Student
    completion: Completion


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completion_for_student(document: TrackerDocument, student_id: str) -> Completion:
    """
    Counts the objectives a student has marked done.

    Args:
        document (TrackerDocument): The document to read.
        student_id (str): The student whose progress is measured.

    Returns:
        Completion: `done` objectives out of `total`, and `pct` as a whole-number
        percentage rounded half up. `pct` is 0 when there are no objectives.
    """
    total = len(document.objectives)
    done = 0
    for objective in document.objectives:
        submission = document.find_submission(student_id, objective.id)
        if submission is not None and submission.is_done:
            done += 1

    pct = round_half_up(100 * done / total) if total else 0

    return Completion(done=done, total=total, pct=pct)


def objectives_by_week(objectives: Iterable[Objective]) -> dict[int, list[Objective]]:
    """
    Groups objectives by week index.

    Returns:
        A dict whose keys are week indices in ascending order. Each list keeps the
        objectives in their original relative order.
    """
    buckets: dict[int, list[Objective]] = {}
    for objective in objectives:
        buckets.setdefault(objective.week_index, []).append(objective)

    return {week: buckets[week] for week in sorted(buckets)}


def objectives_in_week_order(objectives: Iterable[Objective]) -> list[Objective]:
    return sorted(objectives, key=lambda o: o.week_index)


def filter_students(students: Iterable[Student], query: str | None) -> list[Student]:
    """
    Case-insensitive substring search over name, email, and team.

    A blank query returns every student in the original order.
    """
    q = normalize(query)
    if not q:
        return list(students)

    return [s for s in students if q in s.search_text.lower()]


def overview_rows(document: TrackerDocument) -> list[OverviewRow]:
    rows = [
        OverviewRow(student, completion_for_student(document, student.id))
        for student in document.students
    ]
    # stable sort keeps document order among equal percentages
    return sorted(rows, key=lambda row: row.completion.pct, reverse=True)
