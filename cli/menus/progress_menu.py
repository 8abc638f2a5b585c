# cli/menus/progress_menu.py

"""
Review Progress menu for the Progress Tracker CLI.

Lets an admin pick an objective, see every student's status on it, and open a
student's submission to change status or verify extras.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import submissions_menu
from models.objective import Objective
from models.tracker import Tracker


def run(tracker: Tracker) -> None:
    """
    Loops objective selection until the admin cancels.

    Notes:
        - Student rows are re-rendered after every edit so status changes are visible immediately.
    """
    while True:
        objective = helpers.find_objective_from_list(tracker)

        if objective is MenuSignal.CANCEL:
            break
        objective = cast(Objective, objective)

        review_objective(tracker, objective)

    helpers.returning_to("Admin menu")


def review_objective(tracker: Tracker, objective: Objective) -> None:
    while True:
        print(f"\n{formatters.format_banner_text(objective.title[:40])}")
        print(model_formatters.format_objective_multiline(objective, tracker))

        student = helpers.prompt_selection_from_list(
            list(tracker.students),
            "Student Progress",
            lambda s: model_formatters.format_status_oneline(s, objective, tracker),
        )

        if student is None:
            return

        submissions_menu.run(tracker, student, objective, reviewer=True)
