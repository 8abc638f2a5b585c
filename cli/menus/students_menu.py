# cli/menus/students_menu.py

"""
Manage Students menu for the Progress Tracker CLI.

This module defines the admin interface for `Student` records, including:
- Adding new students
- Editing name, email, and team
- Removing students (and all of their submissions)
- Searching students by name, email, or team
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.student import Student
from models.tracker import Tracker


def run(tracker: Tracker) -> None:
    title = formatters.format_banner_text("Manage Students")
    options = [
        ("Add Student", lambda: add_student(tracker)),
        ("Edit Student", lambda: find_and_edit_student(tracker)),
        ("Remove Student", lambda: find_and_remove_student(tracker)),
        ("Search Students", lambda: view_students(tracker)),
    ]

    helpers.run_menu_loop(title, options, "Return to Admin menu")

    helpers.returning_to("Admin menu")


# === add student ===


def add_student(tracker: Tracker) -> None:
    while True:
        name = helpers.prompt_user_input_or_cancel(
            "Enter the student's name (leave blank to cancel):"
        )

        if name is MenuSignal.CANCEL:
            break
        name = cast(str, name)

        email = helpers.prompt_user_input_or_none("Enter email (optional):") or ""
        team = (
            helpers.prompt_user_input_or_none("Enter team, e.g. Logistics (optional):")
            or ""
        )

        helpers.display_response(tracker.add_student(name, email, team))

        if not helpers.confirm_action(
            "Would you like to continue adding new students?"
        ):
            break

    helpers.returning_to("Manage Students menu")


# === edit student ===


def find_and_edit_student(tracker: Tracker) -> None:
    student = helpers.find_student_by_search(tracker)

    if student is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    student = cast(Student, student)

    print(f"\n{model_formatters.format_student_multiline(student, tracker)}")

    name = helpers.prompt_user_input_or_none("Edit name (leave blank to keep):")
    email = helpers.prompt_user_input_or_none("Edit email (leave blank to keep):")
    team = helpers.prompt_user_input_or_none("Edit team (leave blank to keep):")

    helpers.display_response(
        tracker.update_student(student.id, name=name, email=email, team=team)
    )


# === remove student ===


def find_and_remove_student(tracker: Tracker) -> None:
    student = helpers.find_student_by_search(tracker)

    if student is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    student = cast(Student, student)

    helpers.caution_banner()
    print(f"Removing {student.name} also deletes all of their submissions and extras.")

    if not helpers.confirm_action("Remove student?"):
        helpers.returning_without_changes()
        return

    helpers.display_response(tracker.remove_student(student.id))


# === view students ===


def view_students(tracker: Tracker) -> None:
    results = helpers.search_students(tracker)

    if not results:
        print("\nYour search returned no results.")
        return

    print(f"\n{formatters.format_banner_text('Students')}")
    helpers.display_results(results, True, model_formatters.format_student_oneline)
