"""Check-in CRUD and the weekly/monthly report builders.

Every lookup is scoped by both entry id and owner id. An entry that
exists but belongs to somebody else is indistinguishable from a
missing one: callers get ``None``/``False`` and answer 404.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, List, Optional

from .. import db
from ..models import CheckinEntry
from ..util.dates import end_of_day, month_bounds, previous_month, start_of_day, utcnow
from ..util.sanitization import clean_notes, clean_tags
from .aggregation import (
    daily_rounded,
    group_by_day,
    metric_averages,
    optional_metric_averages,
    overall_score,
)


def list_checkins(user_id: int, page: int, page_size: int):
    """Return a Flask-SQLAlchemy pagination of the user's check-ins, newest first."""
    query = CheckinEntry.query.filter_by(user_id=user_id).order_by(
        CheckinEntry.created_at.desc(), CheckinEntry.id.desc()
    )
    return query.paginate(page=page, per_page=page_size, error_out=False)


def get_checkin(checkin_id: int, user_id: int) -> Optional[CheckinEntry]:
    return CheckinEntry.query.filter_by(id=checkin_id, user_id=user_id).first()


def create_checkin(
    user_id: int,
    mood: int,
    stress: int,
    sleep: int,
    notes: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> CheckinEntry:
    checkin = CheckinEntry(
        user_id=user_id,
        mood=mood,
        stress=stress,
        sleep=sleep,
        notes=clean_notes(notes),
        tags=clean_tags(tags),
        created_at=utcnow(),
        updated_at=None,
    )
    db.session.add(checkin)
    db.session.commit()
    return checkin


def update_checkin(checkin_id: int, user_id: int, changes: dict[str, Any]) -> Optional[CheckinEntry]:
    """Apply the provided fields and stamp ``updated_at``.

    Keys absent from ``changes`` are left alone. ``notes`` and ``tags``
    given as ``None`` are also left alone.
    """
    checkin = get_checkin(checkin_id, user_id)
    if checkin is None:
        return None

    for field in ("mood", "stress", "sleep"):
        if changes.get(field) is not None:
            setattr(checkin, field, changes[field])
    if changes.get("notes") is not None:
        checkin.notes = clean_notes(changes["notes"])
    if changes.get("tags") is not None:
        checkin.tags = clean_tags(changes["tags"])

    checkin.updated_at = utcnow()
    db.session.commit()
    return checkin


def delete_checkin(checkin_id: int, user_id: int) -> bool:
    checkin = get_checkin(checkin_id, user_id)
    if checkin is None:
        return False
    db.session.delete(checkin)
    db.session.commit()
    return True


def checkins_between(user_id: int, start: datetime, end: datetime, *, end_inclusive: bool = True):
    """Time-ordered check-ins of ``user_id`` created within ``start``..``end``."""
    query = CheckinEntry.query.filter(
        CheckinEntry.user_id == user_id, CheckinEntry.created_at >= start
    )
    if end_inclusive:
        query = query.filter(CheckinEntry.created_at <= end)
    else:
        query = query.filter(CheckinEntry.created_at < end)
    return query.order_by(CheckinEntry.created_at.asc(), CheckinEntry.id.asc()).all()


def weekly_report(user_id: int, week_start: datetime) -> dict:
    """Seven-day report starting at ``week_start``.

    The window is ``[week_start, week_start + 7 days)``. Daily rows carry
    each metric's day average rounded to an integer; the period
    averages are left unrounded.
    """
    window_end = week_start + timedelta(days=7)
    checkins = checkins_between(user_id, week_start, window_end, end_inclusive=False)

    daily_data = [daily_rounded(day, entries) for day, entries in group_by_day(checkins).items()]

    return {
        "user_id": user_id,
        "week_start": week_start,
        "week_end": window_end - timedelta(microseconds=1),
        "averages": metric_averages(checkins),
        "daily_data": daily_data,
    }


def _month_checkins(user_id: int, first: date, last: date):
    return checkins_between(user_id, start_of_day(first), end_of_day(last))


def _weekly_summaries(checkins, month_start: date, month_end: date) -> list[dict]:
    summaries = []
    chunk_start = month_start
    week_number = 1
    while chunk_start <= month_end:
        chunk_end = min(chunk_start + timedelta(days=6), month_end)
        in_chunk = [c for c in checkins if chunk_start <= c.created_at.date() <= chunk_end]
        summaries.append(
            {
                "week_number": week_number,
                "week_start": chunk_start,
                "week_end": chunk_end,
                "averages": metric_averages(in_chunk),
                "checkin_count": len(in_chunk),
            }
        )
        chunk_start = chunk_end + timedelta(days=1)
        week_number += 1
    return summaries


def _best_and_worst_days(checkins) -> tuple[Optional[dict], Optional[dict]]:
    if not checkins:
        return None, None

    days = []
    for day, entries in group_by_day(checkins).items():
        means = metric_averages(entries)
        row = daily_rounded(day, entries)
        row["overall_score"] = overall_score(means["mood"], means["stress"], means["sleep"])
        days.append(row)

    days.sort(key=lambda row: row["overall_score"], reverse=True)
    return days[0], days[-1]


def monthly_report(user_id: int, year: int, month: int) -> dict:
    """Calendar-month report with a comparison to the previous month.

    Raises ``ValueError`` for a month outside 1..12.
    """
    if not 1 <= month <= 12:
        raise ValueError("Month must be between 1 and 12")

    month_start, month_end = month_bounds(year, month)
    checkins = _month_checkins(user_id, month_start, month_end)

    prev_year, prev_month = previous_month(year, month)
    prev_start, prev_end = month_bounds(prev_year, prev_month)
    previous_checkins = _month_checkins(user_id, prev_start, prev_end)

    best_day, worst_day = _best_and_worst_days(checkins)

    total_days = (month_end - month_start).days + 1
    days_with_checkin = len({c.created_at.date() for c in checkins})
    frequency = days_with_checkin / total_days * 100 if total_days > 0 else 0.0

    return {
        "user_id": user_id,
        "year": year,
        "month": month,
        "month_start": month_start,
        "month_end": month_end,
        "averages": metric_averages(checkins),
        "previous_month_averages": optional_metric_averages(previous_checkins),
        "weekly_summaries": _weekly_summaries(checkins, month_start, month_end),
        "best_worst_days": {"best_day": best_day, "worst_day": worst_day},
        "total_checkins": len(checkins),
        "checkin_frequency": round(frequency, 2),
    }
