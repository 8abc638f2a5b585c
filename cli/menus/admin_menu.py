# cli/menus/admin_menu.py

"""
Admin menu for the Progress Tracker CLI.

Provides calls to the menus for managing objectives and students, reviewing progress
and verifying extras, and site settings (including export, import, and reset).
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menus import (
    objectives_menu,
    overview_menu,
    progress_menu,
    settings_menu,
    students_menu,
)
from models.tracker import Tracker


def run(tracker: Tracker, export_dir: str) -> None:
    title = formatters.format_banner_text(f"{tracker.event_name} - Admin"[:40])
    options = [
        ("Overview", lambda: overview_menu.show_overview(tracker)),
        ("Manage Objectives", lambda: objectives_menu.run(tracker)),
        ("Manage Students", lambda: students_menu.run(tracker)),
        ("Review Progress & Verify Extras", lambda: progress_menu.run(tracker)),
        ("Site Settings, Export & Import", lambda: settings_menu.run(tracker, export_dir)),
    ]

    helpers.run_menu_loop(title, options, "Sign out")

    helpers.returning_to("Start Menu")
