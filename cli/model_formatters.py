# cli/model_formatters.py

# anything that renders domain objects or performs Tracker read-only operations
from textwrap import dedent

import core.formatters as formatters
from core.derivations import OverviewRow
from models.extra import Extra
from models.objective import Objective
from models.student import Student
from models.submission import Submission, SubmissionStatus
from models.tracker import Tracker

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    team = f" | {student.team}" if student.team else ""

    return f"{student.name:<20}{team}"


def format_student_multiline(student: Student, tracker: Tracker) -> str:
    completion = tracker.completion_for_student(student.id)

    return dedent(
        f"""\
        Student in {tracker.event_name}:
        ... Name: {student.name}
        ... Email: {student.email or '-'}
        ... Team: {student.team or '-'}
        ... Completion: {completion.done}/{completion.total} ({completion.pct}%)"""
    )


# === objective formatters ===


def format_objective_oneline(objective: Objective) -> str:
    week = formatters.format_week_label(objective.week_index)
    due = formatters.format_report_date(objective.due_date)

    return f"[{week}] {objective.title:<40} | Due: {due}"


def format_objective_multiline(objective: Objective, tracker: Tracker) -> str:
    return dedent(
        f"""\
        Objective in {tracker.event_name}:
        ... Title: {objective.title}
        ... Details: {objective.details or '-'}
        ... Week: {objective.week_index}
        ... Due: {formatters.format_report_date(objective.due_date)}"""
    )


# === submission formatters ===


def format_status_oneline(student: Student, objective: Objective, tracker: Tracker) -> str:
    status = tracker.status_for(student.id, objective.id)
    marker = "x" if status is SubmissionStatus.DONE else " "

    return f"[{marker}] {student.name:<20} | {status.label}"


def format_submission_multiline(
    submission: Submission | None, student: Student, objective: Objective
) -> str:
    if submission is None:
        return dedent(
            f"""\
            {student.name} on '{objective.title}':
            ... Status: {SubmissionStatus.NOT_STARTED.label}
            ... No notes, evidence, or extras yet."""
        )

    return dedent(
        f"""\
        {student.name} on '{objective.title}':
        ... Status: {submission.status.label}
        ... Notes: {submission.notes or '-'}
        ... Evidence: {submission.evidence_url or '-'}
        ... Extras: {len(submission.extras)} ({submission.verified_extra_count} verified)"""
    )


def format_extra_oneline(extra: Extra) -> str:
    check = "verified" if extra.verified else "pending"
    desc = f" - {extra.desc}" if extra.desc else ""

    return f"{extra.title} [{extra.impact.value}] ({check}){desc}"


# === overview formatters ===


def format_overview_row(row: OverviewRow) -> str:
    student, completion = row

    return (
        f"{student.name:<20} | {student.team or '-':<14} | "
        f"{completion.done}/{completion.total} {formatters.format_percent_bar(completion.pct)}"
    )
