"""Date and time helpers.

The database stores naive UTC datetimes, so every helper here works
in naive UTC as well. Query-string dates are parsed with dateutil.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from dateutil.parser import parse as parse_date  # type: ignore


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    return utcnow().date()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last representable instant of ``day`` (23:59:59.999999)."""
    return datetime.combine(day, time.max)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the given month."""
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def parse_datetime_param(value: str | None, *, end_of_day_if_date: bool = False) -> datetime | None:
    """Parse a query-string date or datetime into naive UTC.

    Returns ``None`` for a missing value and raises ``ValueError`` when
    the value cannot be parsed. A value without a time of day (any
    date format dateutil accepts) resolves to midnight, or to the last
    instant of that day when ``end_of_day_if_date`` is set.
    """
    if value is None or not value.strip():
        return None
    raw = value.strip()
    today = utc_today()
    try:
        parsed = parse_date(raw, default=start_of_day(today))
        # the hour only comes from the default when no time was given
        date_only = parse_date(raw, default=end_of_day(today)).hour != parsed.hour
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid date: {raw!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    if end_of_day_if_date and date_only:
        return end_of_day(parsed.date())
    return parsed
