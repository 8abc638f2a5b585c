# cli/menus/settings_menu.py

"""
Site Settings menu for the Progress Tracker CLI.

Covers the document-wide metadata (club name, event name, admin passcode, week zero)
as well as data management: CSV and JSON export, JSON import, and resetting to the
demo data.
"""

from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.path_utils import (
    CSV_EXPORT_FILENAME,
    JSON_EXPORT_FILENAME,
    read_text_file,
    resolve_export_path,
    write_text_file,
)
from models.tracker import Tracker


def run(tracker: Tracker, export_dir: str) -> None:
    title = formatters.format_banner_text("Site Settings")
    options = [
        ("Edit Club and Event Names", lambda: edit_names(tracker)),
        ("Change Admin Passcode", lambda: edit_passcode(tracker)),
        ("Change Week 0 Start Date", lambda: edit_week_zero(tracker)),
        ("Export CSV Report", lambda: export_csv(tracker, export_dir)),
        ("Export JSON Snapshot", lambda: export_json(tracker, export_dir)),
        ("Import JSON Snapshot", lambda: import_json(tracker)),
        ("Reset to Demo Data", lambda: reset_demo(tracker)),
    ]

    print(f"\nCurrently in week {tracker.current_week_index()}.")

    helpers.run_menu_loop(title, options, "Return to Admin menu")

    helpers.returning_to("Admin menu")


# === metadata ===


def edit_names(tracker: Tracker) -> None:
    print(f"\nClub name: {tracker.club_name}")
    print(f"Event name: {tracker.event_name}")

    club_name = helpers.prompt_user_input_or_none("Edit club name (leave blank to keep):")
    event_name = helpers.prompt_user_input_or_none(
        "Edit event name (leave blank to keep):"
    )

    helpers.display_response(
        tracker.update_settings(club_name=club_name, event_name=event_name)
    )


def edit_passcode(tracker: Tracker) -> None:
    passcode = helpers.prompt_user_input_or_cancel(
        "Enter the new admin passcode (leave blank to cancel):"
    )

    if passcode is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    passcode = cast(str, passcode)

    print("\nNote: the passcode is stored in plain text and only gates the admin view.")

    helpers.display_response(tracker.update_settings(admin_passcode=passcode))


def edit_week_zero(tracker: Tracker) -> None:
    print(f"\nWeek 0 currently starts {formatters.format_report_date(tracker.week_zero)}.")

    week_zero = helpers.prompt_date_or_default(
        "Enter the new week 0 date as YYYY-MM-DD (leave blank to cancel):"
    )

    if week_zero is MenuSignal.DEFAULT:
        helpers.returning_without_changes()
        return

    helpers.display_response(tracker.update_settings(week_zero=week_zero))


# === export and import ===


def export_csv(tracker: Tracker, export_dir: str) -> None:
    path_input = helpers.prompt_user_input_or_none(
        f"Enter a path for the CSV report (leave blank for {CSV_EXPORT_FILENAME} in {export_dir}):"
    )
    path = resolve_export_path(export_dir, CSV_EXPORT_FILENAME, path_input)

    try:
        write_text_file(path, tracker.export_csv())

    except OSError as e:
        print(f"\n[ERROR] Could not write {path}: {e}")

    else:
        print(f"\nCSV report written to {path}.")


def export_json(tracker: Tracker, export_dir: str) -> None:
    path_input = helpers.prompt_user_input_or_none(
        f"Enter a path for the JSON snapshot (leave blank for {JSON_EXPORT_FILENAME} in {export_dir}):"
    )
    path = resolve_export_path(export_dir, JSON_EXPORT_FILENAME, path_input)

    try:
        write_text_file(path, tracker.export_json())

    except OSError as e:
        print(f"\n[ERROR] Could not write {path}: {e}")

    else:
        print(f"\nJSON snapshot written to {path}.")


def import_json(tracker: Tracker) -> None:
    path = helpers.prompt_user_input_or_cancel(
        "Enter the path of a JSON snapshot to import (leave blank to cancel):"
    )

    if path is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    path = cast(str, path)

    try:
        text = read_text_file(path)

    except (OSError, UnicodeDecodeError) as e:
        print(f"\n[ERROR] Could not read {path}: {e}")
        return

    helpers.caution_banner()
    print("Importing replaces ALL current students, objectives, and progress.")

    if not helpers.confirm_action("Do you want to import this file?"):
        helpers.returning_without_changes()
        return

    helpers.display_response(tracker.import_json(text))


def reset_demo(tracker: Tracker) -> None:
    helpers.caution_banner()
    print("Resetting discards ALL current data and restores the demo students and objectives.")

    if not helpers.confirm_action("Reset to demo data?"):
        helpers.returning_without_changes()
        return

    helpers.display_response(tracker.reset_to_default())
