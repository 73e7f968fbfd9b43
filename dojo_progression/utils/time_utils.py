"""
Time and date utilities for progression forecasting.

Key concepts:
  - Elapsed training time: fractional weeks between a join date and "now".
  - Projection arithmetic: adding fractional weeks or whole calendar years
    to a reference datetime.
  - Human-scale differences: the "years saved" figure shown next to the
    attendance slider.

Every function that depends on the current time takes it as an argument;
only ``utcnow()`` reads the clock.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

DAYS_PER_WEEK = 7
DAYS_PER_YEAR = 365


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def as_datetime(value: date | datetime, tz: timezone = timezone.utc) -> datetime:
    """Promote a ``date`` to midnight of that day; attach ``tz`` to naive datetimes."""
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=tz)
    return datetime.combine(value, time.min, tzinfo=tz)


def weeks_between(start: date | datetime, end: date | datetime) -> float:
    """Return the signed number of (fractional) weeks from ``start`` to ``end``.

    Args:
        start: Earlier reference point; a bare ``date`` means midnight UTC.
        end:   Later reference point.

    Returns:
        ``(end - start)`` expressed in weeks. Negative when ``end < start``.
    """
    delta = as_datetime(end) - as_datetime(start)
    return delta.total_seconds() / timedelta(weeks=1).total_seconds()


def add_weeks(base: datetime, weeks: float) -> datetime:
    """Return ``base`` shifted forward by a fractional number of weeks."""
    return base + timedelta(days=weeks * DAYS_PER_WEEK)


def add_years(base: datetime, years: int) -> datetime:
    """Return ``base`` shifted by whole calendar years.

    February 29 maps to February 28 when the target year is not a leap year.

    Raises:
        OverflowError: If the resulting year falls outside ``datetime``'s range.
    """
    target_year = base.year + years
    if not 1 <= target_year <= 9999:
        raise OverflowError(f"Year {target_year} is out of range.")
    try:
        return base.replace(year=target_year)
    except ValueError:
        return base.replace(year=target_year, day=28)


def years_between(a: datetime, b: datetime) -> float:
    """Absolute difference between two datetimes in 365-day years, 1 decimal.

    Ties round half up on the exact binary value (``0.25`` → ``0.3``), not to
    even as the built-in ``round()`` does.
    """
    days = abs((a - b).total_seconds()) / timedelta(days=1).total_seconds()
    years = Decimal(days / DAYS_PER_YEAR)
    return float(years.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 rounding up (not to even)."""
    return int(math.floor(value + 0.5))
