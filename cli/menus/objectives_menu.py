# cli/menus/objectives_menu.py

"""
Manage Objectives menu for the Progress Tracker CLI.

This module defines the admin interface for `Objective` records:
- Adding new objectives to a week
- Editing title, details, week, and due date
- Removing objectives (and their submissions)
- Viewing objectives grouped by week
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.objective import Objective
from models.tracker import Tracker


def run(tracker: Tracker) -> None:
    title = formatters.format_banner_text("Manage Objectives")
    options = [
        ("Add Objective", lambda: add_objective(tracker)),
        ("Edit Objective", lambda: find_and_edit_objective(tracker)),
        ("Remove Objective", lambda: find_and_remove_objective(tracker)),
        ("View Objectives by Week", lambda: view_objectives_by_week(tracker)),
    ]

    helpers.run_menu_loop(title, options, "Return to Admin menu")

    helpers.returning_to("Admin menu")


# === add objective ===


def add_objective(tracker: Tracker) -> None:
    """
    Prompts for a new objective and adds it to the tracker.

    Notes:
        - Week defaults to the current week and due date defaults to now when left blank.
    """
    title = helpers.prompt_user_input_or_cancel(
        "Enter the objective title (leave blank to cancel):"
    )

    if title is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    title = cast(str, title)

    details = helpers.prompt_user_input_or_none("Enter details (optional):") or ""

    current_week = tracker.current_week_index()
    week_index = helpers.prompt_int_or_default(
        f"Enter the week number (leave blank for current week {current_week}):"
    )
    due_date = helpers.prompt_date_or_default(
        "Enter the due date as YYYY-MM-DD (leave blank for today):"
    )

    response = tracker.add_objective(
        title=title,
        details=details,
        week_index=None if week_index is MenuSignal.DEFAULT else cast(int, week_index),
        due_date=None if due_date is MenuSignal.DEFAULT else due_date,
    )

    helpers.display_response(response)


# === edit objective ===


def find_and_edit_objective(tracker: Tracker) -> None:
    objective = helpers.find_objective_from_list(tracker)

    if objective is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    objective = cast(Objective, objective)

    print(f"\n{model_formatters.format_objective_multiline(objective, tracker)}")

    title = helpers.prompt_user_input_or_none("Edit title (leave blank to keep):")
    details = helpers.prompt_user_input_or_none("Edit details (leave blank to keep):")
    week_index = helpers.prompt_int_or_default("Edit week (leave blank to keep):")
    due_date = helpers.prompt_date_or_default(
        "Edit due date as YYYY-MM-DD (leave blank to keep):"
    )

    response = tracker.update_objective(
        objective.id,
        title=title,
        details=details,
        week_index=None if week_index is MenuSignal.DEFAULT else cast(int, week_index),
        due_date=None if due_date is MenuSignal.DEFAULT else due_date,
    )

    helpers.display_response(response)


# === remove objective ===


def find_and_remove_objective(tracker: Tracker) -> None:
    objective = helpers.find_objective_from_list(tracker)

    if objective is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    objective = cast(Objective, objective)

    helpers.caution_banner()
    print(
        f"Removing '{objective.title}' also deletes every student's progress, notes, and extras for it."
    )

    if not helpers.confirm_action("Delete objective?"):
        helpers.returning_without_changes()
        return

    helpers.display_response(tracker.remove_objective(objective.id))


# === view objectives ===


def view_objectives_by_week(tracker: Tracker) -> None:
    weeks = tracker.objectives_by_week()

    if not weeks:
        print("\nNo objectives yet.")
        return

    for week, objectives in weeks.items():
        print(f"\n{formatters.format_banner_text(formatters.format_week_label(week))}")
        for objective in objectives:
            print(f"... {model_formatters.format_objective_oneline(objective)}")
            if objective.details:
                print(f"      {objective.details}")
