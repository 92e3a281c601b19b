"""Insight computations: trends, streaks, period comparison and tip picks.

All of it composes the pure helpers in ``aggregation`` with a few fixed
rule tables. Remember that trend labels describe the direction of the
raw values: a stress trend of ``"improving"`` means stress is rising.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from ..models import CheckinEntry, Tip
from ..util.dates import end_of_day, start_of_day, utc_today
from . import tip_service
from .aggregation import (
    DECLINING,
    IMPROVING,
    analyze_trend,
    current_streak,
    longest_streak,
    metric_averages,
    percentage_change,
)
from .checkin_service import checkins_between

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30, "year": 365}
DEFAULT_PERIOD = "week"

NOT_ENOUGH_DATA = "Not enough data for analysis"
MINIMAL_CHANGES = "Minimal changes between the periods."

# absolute point change a metric needs before the comparison summary mentions it
SUMMARY_THRESHOLD = 0.3

MAX_RECOMMENDED_TIPS = 5
CANDIDATE_TIPS = 50
FALLBACK_CHECKINS = 7
WELLNESS = "Wellness"


def period_window(period: Optional[str], today: Optional[date] = None) -> tuple[datetime, datetime]:
    """Resolve ``week``/``month``/``year`` into a ``(start, end)`` window.

    ``end`` is the last instant of today (UTC) and ``start`` is midnight
    7, 30 or 365 days earlier. Unknown periods behave like ``week``.
    """
    today = today or utc_today()
    days = PERIOD_DAYS.get((period or DEFAULT_PERIOD).lower(), PERIOD_DAYS[DEFAULT_PERIOD])
    return start_of_day(today - timedelta(days=days)), end_of_day(today)


def _metric_trends(checkins) -> dict[str, dict]:
    return {
        metric: analyze_trend([getattr(c, metric) for c in checkins])
        for metric in ("mood", "stress", "sleep")
    }


def build_insights(mood: dict, stress: dict, sleep: dict, checkins) -> List[str]:
    insights: List[str] = []

    if mood["trend"] == IMPROVING:
        insights.append("Your mood is improving! Keep it up.")
    elif mood["trend"] == DECLINING:
        insights.append("Your mood is declining. Consider seeking support.")

    # stress: "declining" is the good direction
    if stress["trend"] == DECLINING:
        insights.append("Great! Your stress level is going down.")
    elif stress["trend"] == IMPROVING and stress["average"] > 3:
        insights.append("Your stress is rising. Try some relaxation techniques.")

    if sleep["trend"] == IMPROVING:
        insights.append("Your sleep quality is improving!")
    elif sleep["trend"] == DECLINING:
        insights.append("Your sleep quality needs attention.")

    if len(checkins) >= 7:
        high_stress_days = sum(1 for c in checkins if c.stress >= 4)
        if high_stress_days > len(checkins) * 0.5:
            insights.append(
                "You are having many stressful days. Consider stress management strategies."
            )

    return insights


def build_alerts(mood: dict, stress: dict, sleep: dict) -> List[dict]:
    alerts: List[dict] = []

    if mood["average"] <= 2:
        alerts.append(
            {
                "type": "warning",
                "message": "Your mood is very low. Consider seeking professional support.",
                "category": "mood",
            }
        )
    if stress["average"] >= 4:
        alerts.append(
            {
                "type": "warning",
                "message": "Your stress level is high. Practise relaxation techniques.",
                "category": "stress",
            }
        )
    if sleep["average"] <= 2:
        alerts.append(
            {
                "type": "warning",
                "message": "Your sleep quality needs attention.",
                "category": "sleep",
            }
        )
    if mood["average"] >= 4 and stress["average"] <= 2 and sleep["average"] >= 4:
        alerts.append(
            {
                "type": "success",
                "message": "Congratulations! You are keeping up excellent wellbeing!",
                "category": "overall",
            }
        )

    return alerts


def get_trends(user_id: int, period: Optional[str] = None, today: Optional[date] = None) -> dict:
    """Trend analysis, insight texts and alerts for a named period."""
    period = period or DEFAULT_PERIOD
    start, end = period_window(period, today)
    checkins = checkins_between(user_id, start, end)

    result = {
        "user_id": user_id,
        "period": period,
        "start_date": start,
        "end_date": end,
        "mood": None,
        "stress": None,
        "sleep": None,
        "insights": [NOT_ENOUGH_DATA],
        "alerts": [],
    }
    if not checkins:
        return result

    trends = _metric_trends(checkins)
    result.update(trends)
    result["insights"] = build_insights(trends["mood"], trends["stress"], trends["sleep"], checkins)
    result["alerts"] = build_alerts(trends["mood"], trends["stress"], trends["sleep"])
    return result


def get_streak(user_id: int, today: Optional[date] = None) -> dict:
    """Current and longest daily streak, plus whether the user checked in today."""
    created = [
        row.created_at
        for row in CheckinEntry.query.with_entities(CheckinEntry.created_at)
        .filter(CheckinEntry.user_id == user_id)
        .all()
    ]
    dates = [moment.date() for moment in created]
    if not dates:
        return {
            "user_id": user_id,
            "current_streak": 0,
            "longest_streak": 0,
            "last_checkin_date": None,
            "is_active": False,
        }

    last_date = max(dates)
    return {
        "user_id": user_id,
        "current_streak": current_streak(dates),
        "longest_streak": longest_streak(dates),
        "last_checkin_date": last_date,
        "is_active": last_date == (today or utc_today()),
    }


def overall_trend(before: dict, after: dict) -> str:
    """``better`` if at least two metrics moved the right way, ``worse`` if none did."""
    improvements = sum(
        (
            after["mood"] > before["mood"],
            after["stress"] < before["stress"],
            after["sleep"] > before["sleep"],
        )
    )
    if improvements >= 2:
        return "better"
    if improvements == 0:
        return "worse"
    return "similar"


def comparison_summary(before: dict, after: dict) -> str:
    parts = []

    mood_change = after["mood"] - before["mood"]
    if abs(mood_change) > SUMMARY_THRESHOLD:
        verb = "improved" if mood_change > 0 else "worsened"
        parts.append(f"Mood {verb} {abs(mood_change):.1f} points")

    stress_change = after["stress"] - before["stress"]
    if abs(stress_change) > SUMMARY_THRESHOLD:
        verb = "decreased" if stress_change < 0 else "increased"
        parts.append(f"Stress {verb} {abs(stress_change):.1f} points")

    sleep_change = after["sleep"] - before["sleep"]
    if abs(sleep_change) > SUMMARY_THRESHOLD:
        verb = "improved" if sleep_change > 0 else "worsened"
        parts.append(f"Sleep {verb} {abs(sleep_change):.1f} points")

    if not parts:
        return MINIMAL_CHANGES
    return ". ".join(parts) + "."


def compare_averages(before: dict, after: dict) -> dict:
    """Derived comparison metrics between two sets of period averages."""
    return {
        "mood_change": percentage_change(before["mood"], after["mood"]),
        "stress_change": percentage_change(before["stress"], after["stress"]),
        "sleep_change": percentage_change(before["sleep"], after["sleep"]),
        "overall_trend": overall_trend(before, after),
        "summary": comparison_summary(before, after),
    }


def compare_periods(
    user_id: int, start1: datetime, end1: datetime, start2: datetime, end2: datetime
) -> dict:
    """Compare averages of two explicit windows; period 1 is the baseline."""
    periods = []
    for start, end in ((start1, end1), (start2, end2)):
        checkins = checkins_between(user_id, start, end)
        periods.append(
            {
                "start_date": start,
                "end_date": end,
                "averages": metric_averages(checkins),
                "total_checkins": len(checkins),
            }
        )

    period1, period2 = periods
    return {
        "user_id": user_id,
        "period1": period1,
        "period2": period2,
        "comparison": compare_averages(period1["averages"], period2["averages"]),
    }


def recommend_categories(mood: dict, stress: dict, sleep: dict) -> List[str]:
    """Map trend results onto the tip categories that need attention.

    Never returns an empty list: when nothing is flagged the answer is
    ``["Wellness"]``.
    """
    categories: List[str] = []

    if (sleep["trend"] == DECLINING and sleep["average"] <= 3.5) or sleep["average"] <= 3.0:
        categories.append("Sleep")

    if (mood["trend"] == DECLINING and mood["average"] <= 3.5) or mood["average"] <= 3.0:
        categories.append("Mood")

    # rising stress is reported as "improving"
    if stress["average"] >= 3.5 or (stress["trend"] == IMPROVING and stress["average"] >= 3.0):
        categories.append("Stress")

    if (
        not categories
        and mood["average"] >= 3.5
        and stress["average"] < 3.5
        and sleep["average"] >= 3.5
        and mood["trend"] != DECLINING
        and stress["trend"] != IMPROVING
        and sleep["trend"] != DECLINING
    ):
        categories.append(WELLNESS)

    if not categories:
        categories.append(WELLNESS)

    return categories


def tips_per_category(category_count: int) -> int:
    if category_count == 1:
        return 5
    if category_count == 2:
        return 3
    return 2


def pick_tips(categories: List[str], candidates: List[Tip]) -> List[Tip]:
    """Fill the recommendation list from ``categories``, topping up with Wellness."""
    unique_categories = list(dict.fromkeys(categories))
    quota = tips_per_category(len(unique_categories))

    picked: List[Tip] = []
    seen: set[int] = set()

    def take(category: str, limit: int) -> None:
        taken = 0
        for tip in candidates:
            if taken >= limit:
                break
            if tip.id in seen or tip.effective_category != category:
                continue
            picked.append(tip)
            seen.add(tip.id)
            taken += 1

    for category in unique_categories:
        take(category, quota)

    if len(picked) < MAX_RECOMMENDED_TIPS:
        take(WELLNESS, MAX_RECOMMENDED_TIPS - len(picked))

    return picked[:MAX_RECOMMENDED_TIPS]


def _recent_checkins(user_id: int, today: Optional[date]):
    start, end = period_window("week", today)
    checkins = checkins_between(user_id, start, end)
    if checkins:
        return checkins

    latest = (
        CheckinEntry.query.filter_by(user_id=user_id)
        .order_by(CheckinEntry.created_at.desc(), CheckinEntry.id.desc())
        .limit(FALLBACK_CHECKINS)
        .all()
    )
    return list(reversed(latest))


def get_recommended_tips(user_id: int, today: Optional[date] = None) -> List[Tip]:
    """Up to five tips matched to the user's last week of check-ins."""
    checkins = _recent_checkins(user_id, today)
    if not checkins:
        return tip_service.first_tips(MAX_RECOMMENDED_TIPS, category=WELLNESS)

    trends = _metric_trends(checkins)
    categories = recommend_categories(trends["mood"], trends["stress"], trends["sleep"])
    logger.debug("Recommending tip categories %s for user %s", categories, user_id)

    candidates = tip_service.first_tips(CANDIDATE_TIPS)
    return pick_tips(categories, candidates)
