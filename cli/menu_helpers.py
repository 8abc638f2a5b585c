# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the Progress Tracker application.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for and validating user input
- Handling user selections and confirmation flows
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

import datetime
from enum import Enum
from typing import Any, Callable, Iterable

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.response import Response
from models.extra import ImpactLevel
from models.objective import Objective
from models.student import Student
from models.submission import SubmissionStatus
from models.tracker import Tracker
from models.types import RecordType


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option:")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def run_menu_loop(
    title: str,
    options: list[tuple[str, Callable[[], Any]]],
    zero_option: str,
) -> None:
    """
    Repeats `display_menu()` and calls the chosen action until the user selects the zero option.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    while True:
        menu_response = display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === prompt user input methods ===


# Prompt Helpers
#
# These functions provide a consistent way to handle user input and confirmation prompts.
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
#     - `prompt_user_input_or_default()` returns `MenuSignal.DEFAULT`.
#     - `prompt_user_input_or_none()` returns `None`.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_default(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.DEFAULT if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


def prompt_date_or_default(prompt: str) -> datetime.datetime | MenuSignal:
    """
    Prompts for a YYYY-MM-DD date until the input is valid or left blank.

    Returns:
        The parsed date at local midnight, or `MenuSignal.DEFAULT` on blank input.
    """
    while True:
        date_input = prompt_user_input_or_default(prompt)

        if date_input is MenuSignal.DEFAULT:
            return MenuSignal.DEFAULT

        try:
            return formatters.parse_date_input(str(date_input))

        except ValueError as e:
            print(f"\n[ERROR] {e}")


def prompt_int_or_default(prompt: str) -> int | MenuSignal:
    while True:
        int_input = prompt_user_input_or_default(prompt)

        if int_input is MenuSignal.DEFAULT:
            return MenuSignal.DEFAULT

        try:
            return int(str(int_input))

        except ValueError:
            print("\nInvalid input. Please enter a whole number.")


def prompt_status_selection() -> SubmissionStatus | None:
    statuses = list(SubmissionStatus)

    print("\nSelect a status:")
    display_results(statuses, True, lambda s: s.label)

    choice = prompt_user_input("Select an option (0 to cancel):")

    try:
        index = int(choice) - 1
        if index < 0:
            return None
        return statuses[index]

    except (ValueError, IndexError):
        print("\nInvalid selection. No changes made.")
        return None


def prompt_impact_selection() -> ImpactLevel:
    levels = list(ImpactLevel)

    print("\nSelect an impact level (leave blank for Low):")
    display_results(levels, True, lambda level: level.value)

    while True:
        choice = prompt_user_input_or_default("Select an option:")

        if choice is MenuSignal.DEFAULT:
            return ImpactLevel.LOW

        try:
            index = int(str(choice)) - 1
            if index >= 0:
                return levels[index]

        except (ValueError, IndexError):
            pass

        print("\nInvalid selection. Please try again.")


# === finder, search, and select methods ===

# --- abstractions ---


def prompt_selection_from_list(
    list_data: list[RecordType],
    list_description: str,
    formatter: Callable[[RecordType], str] = lambda x: str(x),
) -> RecordType | None:
    """
    Prompts the user to select an item from a list of records.

    Args:
        list_data (list[RecordType]): The records to choose from, already in display order.
        list_description (str): A short description used in prompts and headings (e.g. "students").
        formatter (Callable[[RecordType], str], optional): Function to convert each record to a display string. Defaults to str().

    Returns:
        RecordType: The selected record if a valid index is chosen.
        None: If the list is empty or the user cancels with "0".
    """
    if not list_data:
        print(f"\nThere are no {list_description.lower()}.")
        return None

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        display_results(list_data, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return None

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError(index)
            return list_data[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def prompt_selection_from_search(
    search_results: list[RecordType],
    formatter: Callable[[RecordType], str] = lambda x: str(x),
) -> RecordType | None:
    """
    Prompts the user to select a record from a set of search results.

    Notes:
        - If a single result is found, it is returned automatically.
        - Otherwise, a numbered selection prompt is shown.
    """
    if not search_results:
        print("\nYour search returned no results.")
        return None

    if len(search_results) == 1:
        return search_results[0]

    print(f"\nYour search returned {len(search_results)}:")

    return prompt_selection_from_list(search_results, "Search Results", formatter)


# --- students ---


def search_students(tracker: Tracker) -> list[Student]:
    query = prompt_user_input("Search students by name, email, or team (blank for all):")

    return tracker.filter_students(query)


def find_student_by_search(tracker: Tracker) -> Student | MenuSignal:
    student = prompt_selection_from_search(
        search_students(tracker), model_formatters.format_student_oneline
    )

    return MenuSignal.CANCEL if student is None else student


# --- objectives ---


def find_objective_from_list(tracker: Tracker) -> Objective | MenuSignal:
    """
    Prompts the user to select an `Objective`, listed in week order.

    Returns:
        - The selected `Objective`, if available.
        - `MenuSignal.CANCEL` if there are no objectives or the user cancels.
    """
    objective = prompt_selection_from_list(
        tracker.objectives_in_week_order(),
        "Objectives",
        model_formatters.format_objective_oneline,
    )

    return MenuSignal.CANCEL if objective is None else objective


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def display_response(response: Response) -> None:
    if response.success:
        if response.detail:
            print(f"\n{response.detail}")
    else:
        display_response_failure(response)


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
