"""Tests for trends, streaks, period comparison and tip recommendations."""
from datetime import datetime, timedelta
from types import SimpleNamespace

from wellcheck.services.aggregation import DECLINING, IMPROVING, STABLE
from wellcheck.services.insights_service import (
    MINIMAL_CHANGES,
    NOT_ENOUGH_DATA,
    build_alerts,
    build_insights,
    compare_averages,
    comparison_summary,
    overall_trend,
    pick_tips,
    recommend_categories,
)
from wellcheck.util.dates import start_of_day, utc_today

TRENDS_URL = "/api/v1/insights/trends"
STREAK_URL = "/api/v1/insights/streak"
COMPARE_URL = "/api/v1/insights/compare"
TIPS_URL = "/api/v1/insights/recommended-tips"


def days_ago(days, hour=8):
    return start_of_day(utc_today() - timedelta(days=days)) + timedelta(hours=hour)


def trend(average, label=STABLE):
    return {"average": average, "trend": label, "change_percentage": 0.0}


class TestTrends:
    def test_no_data(self, client, user, auth_headers):
        body = client.get(TRENDS_URL, headers=auth_headers).get_json()["data"]
        assert body["userId"] == user["userId"]
        assert body["period"] == "week"
        assert body["mood"] is None
        assert body["insights"] == [NOT_ENOUGH_DATA]
        assert body["alerts"] == []

    def test_rising_mood(self, client, user, auth_headers, make_checkin):
        for days, mood in ((4, 2), (3, 2), (2, 4), (1, 4)):
            make_checkin(user["userId"], mood=mood, stress=3, sleep=3, created_at=days_ago(days))

        body = client.get(f"{TRENDS_URL}?period=week", headers=auth_headers).get_json()["data"]
        assert body["mood"] == {"average": 3.0, "trend": IMPROVING, "changePercentage": 100.0}
        assert body["stress"]["trend"] == STABLE
        assert "Your mood is improving! Keep it up." in body["insights"]

    def test_checkins_outside_the_period_are_ignored(self, client, user, auth_headers, make_checkin):
        make_checkin(user["userId"], created_at=days_ago(20))
        week = client.get(f"{TRENDS_URL}?period=week", headers=auth_headers).get_json()["data"]
        month = client.get(f"{TRENDS_URL}?period=month", headers=auth_headers).get_json()["data"]
        assert week["mood"] is None
        assert month["mood"]["average"] == 3.0

    def test_alerts(self, client, user, auth_headers, make_checkin):
        for days in (2, 1):
            make_checkin(user["userId"], mood=1, stress=5, sleep=2, created_at=days_ago(days))

        alerts = client.get(TRENDS_URL, headers=auth_headers).get_json()["data"]["alerts"]
        assert {alert["category"] for alert in alerts} == {"mood", "stress", "sleep"}
        assert all(alert["type"] == "warning" for alert in alerts)


class TestStreak:
    def test_gap_breaks_current_streak(self, client, user, auth_headers, make_checkin):
        for days in (0, 1, 2, 4):
            make_checkin(user["userId"], created_at=days_ago(days, hour=0))

        body = client.get(STREAK_URL, headers=auth_headers).get_json()["data"]
        assert body["currentStreak"] == 3
        assert body["longestStreak"] >= 3
        assert body["isActive"] is True
        assert body["lastCheckinDate"] == utc_today().isoformat()

    def test_no_checkins(self, client, auth_headers):
        body = client.get(STREAK_URL, headers=auth_headers).get_json()["data"]
        assert body["currentStreak"] == 0
        assert body["longestStreak"] == 0
        assert body["lastCheckinDate"] is None
        assert body["isActive"] is False


class TestCompare:
    def test_second_period_is_better(self, client, user, auth_headers, make_checkin):
        uid = user["userId"]
        for day in (1, 2, 3):
            make_checkin(uid, mood=3, stress=3, sleep=3, created_at=datetime(2024, 1, day, 12))
        for day in (10, 11, 12):
            make_checkin(uid, mood=5, stress=1, sleep=5, created_at=datetime(2024, 1, day, 12))

        response = client.get(
            f"{COMPARE_URL}?start1=2024-01-01&end1=2024-01-03&start2=2024-01-10&end2=2024-01-12",
            headers=auth_headers,
        )
        assert response.status_code == 200
        body = response.get_json()["data"]
        assert body["period1"]["totalCheckins"] == 3
        assert body["period2"]["totalCheckins"] == 3
        comparison = body["comparison"]
        assert comparison["overallTrend"] == "better"
        assert comparison["moodChange"] == 66.67
        assert comparison["stressChange"] == -66.67
        assert comparison["summary"] == (
            "Mood improved 2.0 points. Stress decreased 2.0 points. Sleep improved 2.0 points."
        )

    def test_short_date_only_end_covers_the_whole_day(self, client, user, auth_headers, make_checkin):
        make_checkin(user["userId"], created_at=datetime(2024, 1, 3, 12))

        body = client.get(
            f"{COMPARE_URL}?start1=2024-1-1&end1=2024-1-3&start2=2024-01-10&end2=2024-01-12",
            headers=auth_headers,
        ).get_json()["data"]
        assert body["period1"]["totalCheckins"] == 1

    def test_all_dates_are_required(self, client, auth_headers):
        response = client.get(f"{COMPARE_URL}?start1=2024-01-01&end1=2024-01-03", headers=auth_headers)
        assert response.status_code == 400
        errors = response.get_json()["errors"]
        assert any(error.startswith("start2:") for error in errors)
        assert any(error.startswith("end2:") for error in errors)

    def test_unparseable_date(self, client, auth_headers):
        response = client.get(
            f"{COMPARE_URL}?start1=soon&end1=2024-01-03&start2=2024-01-10&end2=2024-01-12",
            headers=auth_headers,
        )
        assert response.status_code == 400


def test_overall_trend_rules():
    before = {"mood": 3, "stress": 3, "sleep": 3}
    after = {"mood": 5, "stress": 1, "sleep": 5}
    assert overall_trend(before, after) == "better"
    assert overall_trend(after, before) == "worse"
    assert overall_trend(before, {"mood": 4, "stress": 4, "sleep": 3}) == "similar"


def test_compare_averages_with_empty_baseline():
    before = {"mood": 0.0, "stress": 0.0, "sleep": 0.0}
    after = {"mood": 3.0, "stress": 3.0, "sleep": 3.0}
    result = compare_averages(before, after)
    assert result["mood_change"] == 0.0
    assert result["stress_change"] == 0.0


class TestRecommendCategories:
    def test_high_stress_only(self):
        assert recommend_categories(trend(4.0), trend(5.0), trend(4.0)) == ["Stress"]

    def test_rising_moderate_stress(self):
        assert recommend_categories(trend(4.0), trend(3.2, IMPROVING), trend(4.0)) == ["Stress"]

    def test_poor_sleep_and_mood(self):
        categories = recommend_categories(trend(2.5), trend(2.0), trend(3.4, DECLINING))
        assert categories == ["Sleep", "Mood"]

    def test_everything_fine_falls_back_to_wellness(self):
        assert recommend_categories(trend(4.5), trend(2.0), trend(4.5)) == ["Wellness"]


def fake_tip(tip_id, category):
    return SimpleNamespace(id=tip_id, effective_category=category or "Wellness")


class TestPickTips:
    def test_two_categories_take_three_each_then_truncate(self):
        candidates = [fake_tip(i, "Sleep") for i in range(1, 5)] + [
            fake_tip(i, "Mood") for i in range(5, 9)
        ]
        picked = pick_tips(["Sleep", "Mood"], candidates)
        assert [tip.id for tip in picked] == [1, 2, 3, 5, 6]

    def test_tops_up_with_wellness(self):
        candidates = [fake_tip(1, "Stress"), fake_tip(2, None), fake_tip(3, "Wellness")]
        picked = pick_tips(["Stress"], candidates)
        assert [tip.id for tip in picked] == [1, 2, 3]


class TestRecommendedTipsRoute:
    def test_high_stress_recommends_stress_tips(self, client, user, auth_headers, make_checkin):
        for days in (3, 2, 1):
            make_checkin(user["userId"], mood=4, stress=5, sleep=4, created_at=days_ago(days))

        tips = client.get(TIPS_URL, headers=auth_headers).get_json()["data"]
        assert len(tips) == 5
        assert {tip["category"] for tip in tips} == {"Stress"}

    def test_no_checkins_returns_wellness_tips(self, client, auth_headers):
        tips = client.get(TIPS_URL, headers=auth_headers).get_json()["data"]
        assert len(tips) == 5
        assert {tip["category"] for tip in tips} == {"Wellness"}

    def test_falls_back_to_older_checkins(self, client, user, auth_headers, make_checkin):
        for days in (40, 39, 38):
            make_checkin(user["userId"], mood=4, stress=5, sleep=4, created_at=days_ago(days))

        tips = client.get(TIPS_URL, headers=auth_headers).get_json()["data"]
        assert {tip["category"] for tip in tips} == {"Stress"}


def stress_rows(levels):
    return [SimpleNamespace(stress=level) for level in levels]


class TestBuildInsights:
    def test_falling_stress_is_praised(self):
        insights = build_insights(trend(3.0), trend(2.5, DECLINING), trend(3.0), [])
        assert insights == ["Great! Your stress level is going down."]

    def test_rising_stress_needs_high_average(self):
        rising_high = build_insights(trend(3.0), trend(3.5, IMPROVING), trend(3.0), [])
        rising_low = build_insights(trend(3.0), trend(3.0, IMPROVING), trend(3.0), [])
        assert rising_high == ["Your stress is rising. Try some relaxation techniques."]
        assert rising_low == []

    def test_sleep_direction(self):
        improving = build_insights(trend(3.0), trend(3.0), trend(4.0, IMPROVING), [])
        declining = build_insights(trend(3.0), trend(3.0), trend(2.0, DECLINING), [])
        assert improving == ["Your sleep quality is improving!"]
        assert declining == ["Your sleep quality needs attention."]

    def test_mood_declining(self):
        insights = build_insights(trend(2.0, DECLINING), trend(3.0), trend(3.0), [])
        assert insights == ["Your mood is declining. Consider seeking support."]

    def test_many_stressful_days(self):
        message = "You are having many stressful days. Consider stress management strategies."
        majority = stress_rows([4, 5, 4, 4, 1, 2, 3])
        minority = stress_rows([4, 5, 4, 1, 1, 2, 3])
        too_few = stress_rows([5, 5, 5, 5, 5, 5])
        assert message in build_insights(trend(3.0), trend(3.0), trend(3.0), majority)
        assert message not in build_insights(trend(3.0), trend(3.0), trend(3.0), minority)
        assert message not in build_insights(trend(3.0), trend(3.0), trend(3.0), too_few)


class TestBuildAlerts:
    def test_excellent_wellbeing_gets_success_alert(self):
        alerts = build_alerts(trend(4.0), trend(2.0), trend(4.0))
        assert alerts == [
            {
                "type": "success",
                "message": "Congratulations! You are keeping up excellent wellbeing!",
                "category": "overall",
            }
        ]

    def test_no_success_alert_with_moderate_stress(self):
        assert build_alerts(trend(4.0), trend(2.5), trend(4.0)) == []


def test_comparison_summary_with_small_changes():
    before = {"mood": 3.0, "stress": 3.0, "sleep": 3.0}
    after = {"mood": 3.2, "stress": 2.8, "sleep": 3.25}
    assert comparison_summary(before, after) == MINIMAL_CHANGES


def test_three_categories_take_two_each_then_truncate():
    candidates = (
        [fake_tip(i, "Sleep") for i in range(1, 4)]
        + [fake_tip(i, "Mood") for i in range(4, 7)]
        + [fake_tip(i, "Stress") for i in range(7, 10)]
    )
    picked = pick_tips(["Sleep", "Mood", "Stress"], candidates)
    assert [tip.id for tip in picked] == [1, 2, 4, 5, 7]


class TestWellnessGuards:
    def test_rising_stress_blocks_direct_wellness_but_fallback_applies(self):
        # stress too low to be flagged, but its rising trend fails the wellness guard
        categories = recommend_categories(trend(4.0), trend(2.5, IMPROVING), trend(4.0))
        assert categories == ["Wellness"]

    def test_declining_mood_above_threshold_still_ends_in_wellness_once(self):
        categories = recommend_categories(trend(3.8, DECLINING), trend(2.0), trend(4.0))
        assert categories == ["Wellness"]

    def test_flagged_category_suppresses_wellness(self):
        categories = recommend_categories(trend(4.0), trend(3.6, IMPROVING), trend(4.0))
        assert categories == ["Stress"]
