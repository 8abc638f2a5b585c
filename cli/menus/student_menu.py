# cli/menus/student_menu.py

"""
My Tasks menu for the Progress Tracker CLI.

A student picks one of the objectives (listed in week order) to update its status,
notes, or evidence link, or to log an extra contribution. Verification is not
available here.
"""

from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import overview_menu, submissions_menu
from models.objective import Objective
from models.student import Student
from models.tracker import Tracker


def run(tracker: Tracker, student: Student) -> None:
    title = formatters.format_banner_text(f"My Tasks - {student.name}"[:40])
    options = [
        ("Update an Objective", lambda: update_objective(tracker, student)),
        ("My Summary", lambda: overview_menu.show_student_summary(tracker, student)),
        ("Overview", lambda: overview_menu.show_overview(tracker)),
    ]

    helpers.run_menu_loop(title, options, "Sign out")

    helpers.returning_to("Start Menu")


def update_objective(tracker: Tracker, student: Student) -> None:
    objective = helpers.find_objective_from_list(tracker)

    if objective is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    objective = cast(Objective, objective)

    if objective.details:
        print(f"\n{objective.details}")

    submissions_menu.run(tracker, student, objective, reviewer=False)
