"""Routes for derived insights.

This blueprint exposes trend analysis, streaks, period comparison and
tip recommendations for the authenticated user. The heavy lifting is
delegated to ``wellcheck.services.insights_service``.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from ..auth import current_user_id
from ..errors import ValidationError
from ..responses import success_response
from ..schemas import ComparisonSchema, StreakSchema, TipSchema, TrendsInsightSchema
from ..services import insights_service
from ..util.dates import parse_datetime_param

logger = logging.getLogger(__name__)

insights_bp = Blueprint("insights", __name__)


@insights_bp.route("/insights/trends", methods=["GET"])
@jwt_required()
def trends() -> tuple[dict, int]:
    """Trend analysis for ``period`` (``week``, ``month`` or ``year``; default week)."""
    user_id = current_user_id()
    period = request.args.get("period", "week")
    result = insights_service.get_trends(user_id, period)
    logger.info("Computed %s trends for user %s", period, user_id)
    return success_response(TrendsInsightSchema().dump(result)), 200


@insights_bp.route("/insights/streak", methods=["GET"])
@jwt_required()
def streak() -> tuple[dict, int]:
    result = insights_service.get_streak(current_user_id())
    return success_response(StreakSchema().dump(result)), 200


@insights_bp.route("/insights/compare", methods=["GET"])
@jwt_required()
def compare() -> tuple[dict, int]:
    """Compare two windows given as ``start1``, ``end1``, ``start2`` and ``end2``.

    Bare dates are accepted; an end date without a time covers that
    whole day.
    """
    user_id = current_user_id()
    bounds = {}
    errors = {}
    for name in ("start1", "end1", "start2", "end2"):
        try:
            value = parse_datetime_param(
                request.args.get(name), end_of_day_if_date=name.startswith("end")
            )
        except ValueError:
            errors[name] = ["Not a valid date."]
            continue
        if value is None:
            errors[name] = ["Missing value."]
        bounds[name] = value
    if errors:
        raise ValidationError("Invalid comparison dates", errors)

    result = insights_service.compare_periods(
        user_id, bounds["start1"], bounds["end1"], bounds["start2"], bounds["end2"]
    )
    logger.info("Compared periods for user %s", user_id)
    return success_response(ComparisonSchema().dump(result)), 200


@insights_bp.route("/insights/recommended-tips", methods=["GET"])
@jwt_required()
def recommended_tips() -> tuple[dict, int]:
    """Up to five tips chosen from the caller's recent check-ins."""
    user_id = current_user_id()
    tips = insights_service.get_recommended_tips(user_id)
    logger.info("Recommended %d tips for user %s", len(tips), user_id)
    return success_response(TipSchema(many=True).dump(tips)), 200
