"""
Time utility functions for GlowHabit.

This module provides date parsing and calendar window helpers shared by the
analytics engines. Dates travel through the system as ISO ``YYYY-MM-DD``
strings and are converted to ``datetime.date`` only inside computations.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from glowhabit.exceptions import ValidationError

DateLike = Union[str, date, datetime]


def parse_iso_date(value: DateLike) -> date:
    """
    Convert an ISO date, ISO timestamp, ``date`` or ``datetime`` to a ``date``.

    Timestamps such as ``createdAt`` values (``2025-01-03T10:15:00.000Z``)
    keep only their calendar date.

    Raises:
        ValidationError: if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('date', f"expected an ISO date, got {value!r}")

    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        raise ValidationError('date', f"expected an ISO date, got {value!r}")


def to_iso(value: DateLike) -> str:
    """Format any date-like value as ``YYYY-MM-DD``."""
    return parse_iso_date(value).isoformat()


def resolve_today(as_of_date: Optional[DateLike] = None) -> date:
    """Returns ``as_of_date`` as a date, defaulting to today."""
    if as_of_date is None:
        return date.today()
    return parse_iso_date(as_of_date)


def last_n_days(n: int, as_of_date: Optional[DateLike] = None, offset: int = 0) -> List[str]:
    """
    ISO dates for the ``n`` calendar days ending ``offset`` days before today.

    The list walks backward: index 0 is ``today - offset``.
    """
    today = resolve_today(as_of_date)
    return [(today - timedelta(days=offset + i)).isoformat() for i in range(max(n, 0))]


def month_bounds(month: DateLike) -> Tuple[date, date]:
    """First and last day of the month containing ``month``."""
    start = parse_iso_date(month).replace(day=1)
    end = start + relativedelta(months=1, days=-1)
    return start, end


def week_bounds(reference_date: Optional[DateLike] = None) -> Tuple[date, date]:
    """Monday-to-Sunday week containing the reference date."""
    reference = resolve_today(reference_date)
    start = reference - timedelta(days=reference.weekday())
    return start, start + timedelta(days=6)


def unique_sorted_dates(values: Iterable[DateLike], reverse: bool = False) -> List[date]:
    """Parses, de-duplicates and sorts date-like values, skipping unparseable ones."""
    parsed = set()
    for value in values:
        try:
            parsed.add(parse_iso_date(value))
        except ValidationError:
            continue
    return sorted(parsed, reverse=reverse)


def time_of_day(hour: int) -> str:
    """Bucket an hour (0-23) into morning/afternoon/evening/night."""
    if hour < 12:
        return 'morning'
    if hour < 17:
        return 'afternoon'
    if hour < 21:
        return 'evening'
    return 'night'
