"""Calendar-aware date arithmetic: ages, date differences, birthdays.

Intervals are reported the way people say them ("3 years, 2 months,
5 days"). When the day component goes negative, a month is borrowed using
the real length of the month before the later date's month, so results
follow the Gregorian calendar rather than a fixed 30-day month.

Every function that depends on "now" takes an optional ``today``.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

from calcdeck.errors import InvalidInput
from calcdeck.models import AgeDetails, DateInterval, NextBirthday

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO 'YYYY-MM-DD' string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise InvalidInput(f"Not a date: {value!r} (expected YYYY-MM-DD)") from None


def _days_in_previous_month(d: date) -> int:
    """Length of the month immediately before ``d``'s month."""
    return (d.replace(day=1) - timedelta(days=1)).day


def _interval(start: date, end: date) -> DateInterval:
    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day

    if days < 0:
        months -= 1
        days += _days_in_previous_month(end)

    if months < 0:
        years -= 1
        months += 12

    return DateInterval(
        years=years,
        months=months,
        days=days,
        total_days=(end - start).days,
    )


def calculate_age(birth_date: DateLike, today: Optional[DateLike] = None) -> DateInterval:
    """Age on ``today`` as years, months and days."""
    birth = as_date(birth_date)
    now = as_date(today) if today is not None else date.today()
    return _interval(birth, now)


def calculate_date_difference(date1: DateLike, date2: DateLike) -> DateInterval:
    """Interval between two dates, regardless of which one comes first."""
    d1, d2 = as_date(date1), as_date(date2)
    start, end = min(d1, d2), max(d1, d2)
    return _interval(start, end)


def _birthday_in(birth: date, year: int) -> date:
    """``birth``'s month/day in ``year``, clamping Feb 29 to Feb 28."""
    last_day = calendar.monthrange(year, birth.month)[1]
    return date(year, birth.month, min(birth.day, last_day))


def calculate_next_birthday(
    birth_date: DateLike, today: Optional[DateLike] = None
) -> NextBirthday:
    """Next occurrence of the birthday on or after ``today``."""
    birth = as_date(birth_date)
    now = as_date(today) if today is not None else date.today()

    upcoming = _birthday_in(birth, now.year)
    if upcoming < now:
        upcoming = _birthday_in(birth, now.year + 1)

    return NextBirthday(date=upcoming, days_until=(upcoming - now).days)


def calculate_age_details(
    birth_date: DateLike, today: Optional[DateLike] = None
) -> AgeDetails:
    """Age in calendar units plus totals in days, weeks and months."""
    birth = as_date(birth_date)
    now = as_date(today) if today is not None else date.today()

    age = _interval(birth, now)
    return AgeDetails(
        years=age.years,
        months=age.months,
        days=age.days,
        total_days=age.total_days,
        total_weeks=age.total_days // 7,
        total_months=age.years * 12 + age.months,
        next_birthday=calculate_next_birthday(birth, now),
    )
