"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _relative_date(date_str: str, today: date) -> date | None:
    """Resolve relative expressions such as "yesterday" or "last month"."""
    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in simple:
        return simple[date_str]

    starts = {
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
        "this week": today - timedelta(days=today.weekday()),
        "last week": today - timedelta(days=today.weekday() + 7),
    }
    return starts.get(date_str)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "last month", "this year", ...). Relative
    periods resolve to their first day.

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    relative = _relative_date(date_str, date.today())
    if relative is not None:
        return relative

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a transaction instant.

    A bare or relative date becomes midnight of that day; an ISO-8601
    timestamp keeps its time (and offset, if any).

    Raises:
        ValueError: If the string cannot be parsed
    """
    stripped = value.strip()
    relative = _relative_date(stripped.lower(), date.today())
    if relative is not None:
        return datetime.combine(relative, datetime.min.time())

    try:
        return date_parser.isoparse(stripped)
    except ValueError:
        pass
    try:
        return date_parser.parse(stripped)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "last-month":
        first_of_month = today.replace(day=1)
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        first_of_year = today.replace(month=1, day=1)
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)
    if period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return start_date, start_date + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
