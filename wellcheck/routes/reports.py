"""Routes for weekly and monthly check-in reports.

The aggregation itself lives in ``wellcheck.services.checkin_service``;
these handlers only parse query parameters and wrap the result.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from ..auth import current_user_id
from ..errors import ForbiddenError, ValidationError
from ..responses import success_response
from ..schemas import MonthlyReportSchema, WeeklyReportSchema
from ..services import checkin_service
from ..util.dates import parse_datetime_param

logger = logging.getLogger(__name__)

reports_bp = Blueprint("reports", __name__)


def _int_arg(name: str) -> int:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        raise ValidationError(f"{name} parameter is required", {name: ["Missing value."]})
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", {name: ["Not a valid integer."]})


@reports_bp.route("/reports/weekly", methods=["GET"])
@jwt_required()
def weekly_report() -> tuple[dict, int]:
    """Return the seven-day report starting at ``weekStart``.

    An optional ``userId`` may be given, but it must be the caller's own
    id; anything else is refused with 403.
    """
    user_id = current_user_id()

    target = request.args.get("userId")
    if target is not None and target.strip() and target.strip() != str(user_id):
        logger.warning("User %s attempted to access the report of user %s", user_id, target)
        raise ForbiddenError("You can only access your own reports")

    try:
        week_start = parse_datetime_param(request.args.get("weekStart"))
    except ValueError as exc:
        raise ValidationError(str(exc), {"weekStart": ["Not a valid date."]})
    if week_start is None:
        raise ValidationError("weekStart parameter is required", {"weekStart": ["Missing value."]})

    report = checkin_service.weekly_report(user_id, week_start)
    logger.info("Generated weekly report for user %s starting %s", user_id, week_start)
    return success_response(WeeklyReportSchema().dump(report)), 200


@reports_bp.route("/reports/monthly", methods=["GET"])
@jwt_required()
def monthly_report() -> tuple[dict, int]:
    """Return the report for calendar month ``month`` (1-12) of ``year``."""
    user_id = current_user_id()
    year = _int_arg("year")
    month = _int_arg("month")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12", {"month": ["Must be 1-12."]})

    report = checkin_service.monthly_report(user_id, year, month)
    logger.info("Generated monthly report for user %s - %s/%s", user_id, year, month)
    return success_response(MonthlyReportSchema().dump(report)), 200
