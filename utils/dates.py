from calendar import monthrange
from datetime import date, datetime


def normalize_date(value) -> date:
    """Strip time-of-day so month membership only ever depends on the calendar date.

    Accepts ``date``, ``datetime`` or an ISO string (``YYYY-MM-DD`` with an
    optional time part).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip()).date()
    raise TypeError(f"cannot interpret {value!r} as a date")


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    return min(day, days_in_month(year, month))


def first_of_month(value) -> date:
    d = normalize_date(value)
    return d.replace(day=1)


def add_months(value, months: int) -> date:
    """Return the first day of the month ``months`` after the one containing ``value``."""
    d = first_of_month(value)
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_window(month_start):
    """Inclusive (first day, last day) of the month containing ``month_start``."""
    start = first_of_month(month_start)
    end = start.replace(day=days_in_month(start.year, start.month))
    return start, end


def in_window(value, window) -> bool:
    start, end = window
    return start <= normalize_date(value) <= end
