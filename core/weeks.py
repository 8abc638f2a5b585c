# core/weeks.py

"""
Week arithmetic for bucketing objectives.

Weeks start on Monday. All computations operate on local calendar days: a
`datetime.datetime` is reduced to its `.date()` before any subtraction, so
time-of-day and timezone offsets never shift a date into a neighbouring week.
"""

import datetime


def _as_date(value: datetime.date | datetime.datetime) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def start_of_week(value: datetime.date | datetime.datetime) -> datetime.date:
    """
    Returns the Monday at or before the given date.

    Args:
        value (datetime.date | datetime.datetime): Any calendar date or local datetime.

    Returns:
        The Monday of the week containing `value`, as a `datetime.date`.
    """
    day = _as_date(value)
    return day - datetime.timedelta(days=day.weekday())


def week_index(
    week_zero: datetime.date | datetime.datetime,
    value: datetime.date | datetime.datetime,
) -> int:
    """
    Counts whole Monday-aligned weeks from `week_zero` to `value`.

    Args:
        week_zero (datetime.date | datetime.datetime): The origin of the week count.
        value (datetime.date | datetime.datetime): The date to index.

    Returns:
        The integer week offset. Negative if `value` falls before `week_zero`.
    """
    delta = start_of_week(value) - start_of_week(week_zero)
    return delta.days // 7


def current_week_index(
    week_zero: datetime.date | datetime.datetime,
    today: datetime.date | None = None,
) -> int:
    if today is None:
        today = datetime.date.today()
    return week_index(week_zero, today)


def monday_of_current_week() -> datetime.datetime:
    monday = start_of_week(datetime.date.today())
    return datetime.datetime.combine(monday, datetime.time.min)
