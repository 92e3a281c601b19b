"""Aggregation utilities for check-in data.

Pure functions: averages, the two-half trend comparison, percentage
change between two averages, streak lengths over a set of dates and
per-day grouping. Nothing here touches the database, so routes and
services can feed it query results and tests can feed it plain lists.

Trend labels are metric-agnostic. ``"improving"`` means the values
went *up*; for stress that is the undesirable direction, and callers
that phrase messages for users must account for it.
"""
from __future__ import annotations

from collections import OrderedDict
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

IMPROVING = "improving"
DECLINING = "declining"
STABLE = "stable"

# percentage change beyond which a trend stops being "stable"
TREND_THRESHOLD = 5.0

METRICS = ("mood", "stress", "sleep")


def average(values: Iterable[float]) -> float:
    """Arithmetic mean of ``values``; ``0.0`` for an empty sequence."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def analyze_trend(values: Sequence[float]) -> dict[str, float | str]:
    """Compare the first and second half of a time-ordered sequence.

    The split happens at ``len(values) // 2``, so for odd lengths the
    extra element belongs to the second half. Returns the overall
    average, the trend label and the percentage change between the
    half averages, both numbers rounded to two decimals. An empty
    sequence yields a neutral, zeroed result.
    """
    if not values:
        return {"average": 0.0, "trend": STABLE, "change_percentage": 0.0}

    middle = len(values) // 2
    first_half = average(values[:middle])
    second_half = average(values[middle:])

    if first_half != 0:
        change_percentage = (second_half - first_half) / first_half * 100
    else:
        change_percentage = 0.0

    if change_percentage > TREND_THRESHOLD:
        trend = IMPROVING
    elif change_percentage < -TREND_THRESHOLD:
        trend = DECLINING
    else:
        trend = STABLE

    return {
        "average": round(average(values), 2),
        "trend": trend,
        "change_percentage": round(change_percentage, 2),
    }


def percentage_change(old: float, new: float) -> float:
    """``(new - old) / old * 100`` rounded to two decimals, 0 when ``old`` is 0."""
    if old == 0:
        return 0.0
    return round((new - old) / old * 100, 2)


def _distinct_dates_desc(dates: Iterable[date]) -> List[date]:
    return sorted(set(dates), reverse=True)


def current_streak(dates: Iterable[date]) -> int:
    """Number of consecutive days ending at the most recent date."""
    ordered = _distinct_dates_desc(dates)
    if not ordered:
        return 0

    streak = 1
    counted = ordered[0]
    for day in ordered[1:]:
        if day != counted - timedelta(days=1):
            break
        streak += 1
        counted = day
    return streak


def longest_streak(dates: Iterable[date]) -> int:
    """Length of the longest run of consecutive days in ``dates``."""
    ordered = _distinct_dates_desc(dates)
    if not ordered:
        return 0

    longest = running = 1
    for newer, older in zip(ordered, ordered[1:]):
        if (newer - older).days == 1:
            running += 1
            longest = max(longest, running)
        else:
            running = 1
    return longest


def metric_averages(entries: Sequence) -> dict[str, float]:
    """Unrounded mood/stress/sleep means over ``entries`` (zeros if empty)."""
    return {metric: average(getattr(e, metric) for e in entries) for metric in METRICS}


def optional_metric_averages(entries: Sequence) -> Optional[dict[str, float]]:
    if not entries:
        return None
    return metric_averages(entries)


def group_by_day(entries: Iterable) -> "OrderedDict[date, list]":
    """Group entries by the calendar date of ``created_at``.

    Groups keep the order in which their first entry appears, so
    time-ordered input produces chronologically ordered days.
    """
    groups: "OrderedDict[date, list]" = OrderedDict()
    for entry in entries:
        groups.setdefault(entry.created_at.date(), []).append(entry)
    return groups


def daily_rounded(day: date, entries: Sequence) -> dict:
    """Per-day row with each metric's average rounded to an integer."""
    means = metric_averages(entries)
    return {"date": day, **{metric: int(round(value)) for metric, value in means.items()}}


def overall_score(mood: float, stress: float, sleep: float) -> float:
    """Single wellbeing score where higher is better; stress is inverted."""
    return (mood + (5 - stress) + sleep) / 3
