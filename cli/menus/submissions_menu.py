# cli/menus/submissions_menu.py

"""
Edit Submission menu for the Progress Tracker CLI.

Shared by the student "My Tasks" view and the admin progress review. Every action is
routed through the `Tracker` upsert operations, so a submission is created on first
edit and fields written through one action are never lost through another.
Verifying extras is only offered to reviewers.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.extra import Extra
from models.objective import Objective
from models.student import Student
from models.tracker import Tracker


def run(
    tracker: Tracker, student: Student, objective: Objective, reviewer: bool = False
) -> None:
    """
    Top-level loop with dispatch for the Edit Submission menu.

    Args:
        tracker (Tracker): The active `Tracker`.
        student (Student): The student whose submission is edited.
        objective (Objective): The objective the submission belongs to.
        reviewer (bool): If True, extras can be verified and unverified.
    """
    title = formatters.format_banner_text(f"{student.name}: {objective.title}"[:40])
    options = [
        ("View Submission", lambda: view_submission(tracker, student, objective)),
        ("Mark Status", lambda: mark_status(tracker, student, objective)),
        ("Edit Notes", lambda: edit_notes(tracker, student, objective)),
        ("Edit Evidence Link", lambda: edit_evidence_url(tracker, student, objective)),
        ("Log Extra Contribution", lambda: add_extra(tracker, student, objective)),
    ]
    if reviewer:
        options.append(
            ("Verify or Unverify Extra", lambda: verify_extra(tracker, student, objective))
        )

    helpers.run_menu_loop(title, options, "Return")


def view_submission(tracker: Tracker, student: Student, objective: Objective) -> None:
    submission = tracker.get_submission(student.id, objective.id)

    print(f"\n{model_formatters.format_submission_multiline(submission, student, objective)}")

    if submission is None or not submission.extras:
        print("\nNo extra items yet.")
        return

    print("\nExtras:")
    helpers.display_results(submission.extras, True, model_formatters.format_extra_oneline)


def mark_status(tracker: Tracker, student: Student, objective: Objective) -> None:
    status = helpers.prompt_status_selection()

    if status is None:
        helpers.returning_without_changes()
        return

    helpers.display_response(tracker.mark_status(student.id, objective.id, status))


def edit_notes(tracker: Tracker, student: Student, objective: Objective) -> None:
    notes = helpers.prompt_user_input_or_cancel(
        "Enter notes: any blockers, updates, or context (leave blank to cancel):"
    )

    if notes is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    notes = cast(str, notes)

    helpers.display_response(tracker.set_notes(student.id, objective.id, notes))


def edit_evidence_url(tracker: Tracker, student: Student, objective: Objective) -> None:
    evidence_url = helpers.prompt_user_input_or_cancel(
        "Enter a link to a doc, photo, or video (leave blank to cancel):"
    )

    if evidence_url is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    evidence_url = cast(str, evidence_url)

    helpers.display_response(
        tracker.set_evidence_url(student.id, objective.id, evidence_url)
    )


def add_extra(tracker: Tracker, student: Student, objective: Objective) -> None:
    title = helpers.prompt_user_input_or_cancel(
        "Enter a title for the extra contribution (leave blank to cancel):"
    )

    if title is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    title = cast(str, title)

    desc = helpers.prompt_user_input_or_none("Short description (optional):") or ""
    impact = helpers.prompt_impact_selection()

    helpers.display_response(
        tracker.add_extra(student.id, objective.id, title, desc, impact)
    )


def verify_extra(tracker: Tracker, student: Student, objective: Objective) -> None:
    submission = tracker.get_submission(student.id, objective.id)

    if submission is None:
        print("\nNo extra items yet.")
        return

    extra = helpers.prompt_selection_from_list(
        list(submission.extras), "Extras", model_formatters.format_extra_oneline
    )

    if extra is None:
        helpers.returning_without_changes()
        return
    extra = cast(Extra, extra)

    helpers.display_response(
        tracker.verify_extra(student.id, objective.id, extra.id, not extra.verified)
    )
