"""Date utilities for spendview.

Pure functions for calendar boundaries, date arithmetic and formatting.
Weeks start on Sunday. Month lengths follow the Gregorian calendar.
"""

import calendar
from datetime import date, datetime, time, timedelta


def system_clock() -> datetime:
    """Current local time."""
    return datetime.now()


def start_of_day(value: datetime | date) -> datetime:
    """First instant of the day containing value."""
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: datetime | date) -> datetime:
    """Last instant of the day containing value."""
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


def week_start_date(day: date) -> date:
    """Sunday on or before the given day."""
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_week(value: datetime) -> datetime:
    """First instant of the Sunday-based week containing value."""
    return start_of_day(week_start_date(value.date()))


def end_of_week(value: datetime) -> datetime:
    """Last instant of the Sunday-based week containing value."""
    return end_of_day(week_start_date(value.date()) + timedelta(days=6))


def start_of_month(value: datetime) -> datetime:
    """First instant of the month containing value."""
    return datetime(value.year, value.month, 1)


def end_of_month(value: datetime) -> datetime:
    """Last instant of the month containing value."""
    last_day = calendar.monthrange(value.year, value.month)[1]
    return end_of_day(date(value.year, value.month, last_day))


def start_of_year(value: datetime) -> datetime:
    """First instant of the year containing value."""
    return datetime(value.year, 1, 1)


def end_of_year(value: datetime) -> datetime:
    """Last instant of the year containing value."""
    return end_of_day(date(value.year, 12, 31))


def subtract_months(value: datetime, months: int) -> datetime:
    """Move value back by whole months, clamping the day to the target month.

    Args:
        value: Starting instant.
        months: Number of months to go back.

    Returns:
        Same time of day in the target month (e.g. Mar 31 - 1 month = Feb 28/29).
    """
    index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def subtract_years(value: datetime, years: int) -> datetime:
    """Move value back by whole years (Feb 29 becomes Feb 28)."""
    year = value.year - years
    day = min(value.day, calendar.monthrange(year, value.month)[1])
    return value.replace(year=year, day=day)


def is_within_interval(value: datetime, start: datetime, end: datetime) -> bool:
    """Check inclusive containment of value in [start, end]."""
    return start <= value <= end


def month_key(day: date) -> tuple[int, int]:
    """(year, month) pair identifying the calendar month of day."""
    return day.year, day.month


def format_date_label(day: date) -> str:
    """Human-readable date label (e.g., "Jan 05, 2025")."""
    return day.strftime("%b %d, %Y")


def format_month_label(day: date) -> str:
    """Human-readable month label (e.g., "January 2025")."""
    return day.strftime("%B %Y")


def parse_date_label(label: str) -> date:
    """Parse a label produced by format_date_label.

    Raises:
        ValueError: If label is not in "Mon DD, YYYY" form.
    """
    return datetime.strptime(label.strip(), "%b %d, %Y").date()
