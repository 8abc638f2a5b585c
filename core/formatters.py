# core/formatters.py

# all pure utilities & date/datetime helpers
# must never import from models!

import datetime

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_percent_bar(pct: int, width: int = 20) -> str:
    filled = round(width * max(0, min(pct, 100)) / 100)
    return f"[{'#' * filled}{'.' * (width - filled)}] {pct:>3}%"


# === date parsers ===


def parse_iso_datetime(value: str) -> datetime.datetime:
    """
    Parses an ISO-8601 timestamp into a naive local `datetime.datetime`.

    Accepts the trailing `Z` produced by browser `toISOString()` as well as explicit
    offsets. Aware values are converted to local time before the offset is dropped,
    so the calendar day matches what the user saw when the value was written.

    Raises:
        TypeError: If the value is not a string.
        ValueError: If the string is not a valid ISO timestamp.
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected an ISO date string, got {type(value).__name__}.")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)

    return parsed


def parse_date_input(value: str) -> datetime.datetime:
    """
    Parses a YYYY-MM-DD string into a `datetime.datetime` at local midnight.

    Raises:
        ValueError: If the input is not formatted as YYYY-MM-DD.
    """
    try:
        return datetime.datetime.strptime(value.strip(), "%Y-%m-%d")

    except (AttributeError, ValueError):
        raise ValueError("Invalid input. The date must be formatted as YYYY-MM-DD.")


# === date formatters ===


def format_report_date(value: datetime.datetime | datetime.date) -> str:
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_week_label(week_index: int) -> str:
    return f"Week {week_index}"
