"""Service layer for the Wellcheck API.

This package contains the business logic that sits between the
Flask route handlers and the database models. Keeping it here keeps
the routes thin and makes the calculations (averages, trends, streaks,
recommendations) easy to unit test.

Nothing in this package should perform any HTTP handling.
Services return models or plain dictionaries, and raise the
exceptions defined in ``wellcheck.errors`` when something goes
wrong.
"""

from . import account_service, checkin_service, insights_service, tip_service
from .aggregation import analyze_trend, current_streak, longest_streak, percentage_change

__all__ = [
    "account_service",
    "checkin_service",
    "insights_service",
    "tip_service",
    "analyze_trend",
    "current_streak",
    "longest_streak",
    "percentage_change",
]
