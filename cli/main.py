# cli/main.py

"""
Start Menu for the Progress Tracker CLI.

Parses command line arguments, configures logging, loads the tracker from the
configured storage directory, and offers the admin and student entry points.
"""

import argparse
import logging
import sys
from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import admin_menu, overview_menu, student_menu
from core.blob_store import FileBlobStore
from core.config import TrackerConfig, load_config
from models.student import Student
from models.tracker import Tracker

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str) -> None:
    """Attaches a stderr handler to the root logger, once."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Club event progress tracker")
    parser.add_argument(
        "--config",
        help="Path to config file (default: ./config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the log level from the config file",
    )
    return parser.parse_args(argv)


def run_cli(tracker: Tracker, config: TrackerConfig) -> None:
    """
    Top-level loop with dispatch for the Start menu.
    """
    title = formatters.format_banner_text(tracker.event_name[:40])
    options = [
        ("Continue as Admin", lambda: sign_in_admin(tracker, config)),
        ("Continue as Student", lambda: sign_in_student(tracker)),
        ("View Overview", lambda: overview_menu.show_overview(tracker)),
    ]

    print(f"\n{tracker.club_name}")

    helpers.run_menu_loop(title, options, "Exit Program")

    exit_program()


def sign_in_admin(tracker: Tracker, config: TrackerConfig) -> None:
    passcode = helpers.prompt_user_input_or_cancel(
        "Enter the admin passcode (leave blank to cancel):"
    )

    if passcode is MenuSignal.CANCEL:
        return
    passcode = cast(str, passcode)

    if not tracker.check_admin_passcode(passcode):
        print("\nWrong passcode.")
        return

    print("\nWelcome, coordinator!")
    admin_menu.run(tracker, config.export_dir)


def sign_in_student(tracker: Tracker) -> None:
    student = helpers.prompt_selection_from_list(
        list(tracker.students), "Select your name", model_formatters.format_student_oneline
    )

    if student is None:
        return
    student = cast(Student, student)

    student_menu.run(tracker, student)


def exit_program() -> None:
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.

    Notes:
        - Every change is saved when it is made, so there is nothing to flush here.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    # provisional level until the config file has been read
    setup_logging(args.log_level or "WARNING")

    config = load_config(args.config)
    setup_logging(args.log_level or config.log_level)

    logging.getLogger(__name__).info(f"Using storage directory {config.storage_dir}")

    tracker = Tracker.load(FileBlobStore(config.storage_dir), config.storage_key)

    try:
        run_cli(tracker, config)

    except (KeyboardInterrupt, EOFError):
        exit_program()


if __name__ == "__main__":
    main()
