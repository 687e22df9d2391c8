"""Workday arithmetic."""

from datetime import date, timedelta

SATURDAY = 5
SUNDAY = 6


def is_weekend(day: date) -> bool:
    """Return True for Saturday and Sunday."""
    return day.weekday() in (SATURDAY, SUNDAY)


def add_workdays(day: date, count: int) -> date:
    """Advance by ``count`` workdays, skipping weekends.

    The starting day itself is never counted, so advancing a Friday by one
    workday lands on Monday and advancing a Saturday by one lands on Monday.
    """
    result = day
    while count > 0:
        result += timedelta(days=1)
        if not is_weekend(result):
            count -= 1
    return result


def add_years(day: date, years: int) -> date:
    """Same month and day ``years`` later; 29 February rolls over to 1 March."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return date(day.year + years, 3, 1)


def days_between(start: date, end: date) -> float:
    """Elapsed calendar days from ``start`` to ``end`` as hours / 24."""
    return (end - start).total_seconds() / 3600 / 24
