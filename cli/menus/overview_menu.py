# cli/menus/overview_menu.py

"""
Overview screens for the Progress Tracker CLI: the class-wide completion table and a
single student's summary.
"""

import cli.model_formatters as model_formatters
import core.formatters as formatters
from models.student import Student
from models.tracker import Tracker


def show_overview(tracker: Tracker) -> None:
    """
    Prints every student's completion, highest percentage first.
    """
    print(f"\n{formatters.format_banner_text('Overview')}")
    print(f"{tracker.event_name}\n{tracker.club_name}")
    print(f"Currently in week {tracker.current_week_index()}.\n")

    rows = tracker.overview()

    if not rows:
        print("No students yet.")
        return

    for row in rows:
        print(model_formatters.format_overview_row(row))


def show_student_summary(tracker: Tracker, student: Student) -> None:
    completion = tracker.completion_for_student(student.id)

    print(f"\n{formatters.format_banner_text('My Summary')}")
    print(f"{student.name}: {completion.done}/{completion.total} objectives done")
    print(formatters.format_percent_bar(completion.pct))

    for objective in tracker.objectives:
        status = tracker.status_for(student.id, objective.id)
        print(f"... {objective.title:<40} | {status.label}")
