"""
Routes for the caller's own check-ins.

Every endpoint is scoped to the authenticated user. Asking for a
check-in that belongs to somebody else returns the same 404 as asking
for one that does not exist.
"""

from __future__ import annotations

import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from ..auth import current_user_id
from ..errors import NotFoundError
from ..responses import normalize_page_args, paginated_response, success_response
from ..schemas import CheckinCreateSchema, CheckinSchema, CheckinUpdateSchema
from ..services import checkin_service

logger = logging.getLogger(__name__)

checkins_bp = Blueprint("checkins", __name__)

CHECKIN_NOT_FOUND = "Check-in not found"


@checkins_bp.route("/checkins", methods=["GET"])
@jwt_required()
def list_checkins() -> tuple[dict, int]:
    """Return the caller's check-ins, newest first, one page at a time."""
    user_id = current_user_id()
    page, page_size = normalize_page_args(
        request.args.get("page", 1), request.args.get("pageSize", 10)
    )
    pagination = checkin_service.list_checkins(user_id, page, page_size)
    items = CheckinSchema(many=True).dump(pagination.items)
    logger.info("Retrieved %d check-ins for user %s on page %d", len(items), user_id, page)
    return (
        paginated_response(items, pagination.total, page, page_size, base_path=request.path),
        200,
    )


@checkins_bp.route("/checkins/<int:checkin_id>", methods=["GET"])
@jwt_required()
def get_checkin(checkin_id: int) -> tuple[dict, int]:
    checkin = checkin_service.get_checkin(checkin_id, current_user_id())
    if checkin is None:
        raise NotFoundError(CHECKIN_NOT_FOUND)
    return success_response(CheckinSchema().dump(checkin)), 200


@checkins_bp.route("/checkins", methods=["POST"])
@jwt_required()
def create_checkin() -> tuple[dict, int]:
    """Create a check-in.

    Accepts ``mood``, ``stress`` and ``sleep`` (integers 1-5), optional
    ``notes`` (up to 1000 characters) and optional ``tags``.
    """
    user_id = current_user_id()
    data = CheckinCreateSchema().load(request.get_json(silent=True) or {})
    checkin = checkin_service.create_checkin(
        user_id,
        data["mood"],
        data["stress"],
        data["sleep"],
        notes=data.get("notes"),
        tags=data.get("tags"),
    )
    logger.info("Created check-in %s for user %s", checkin.id, user_id)
    return success_response(CheckinSchema().dump(checkin), "Check-in created successfully"), 201


@checkins_bp.route("/checkins/<int:checkin_id>", methods=["PUT"])
@jwt_required()
def update_checkin(checkin_id: int) -> tuple[dict, int]:
    """Update any subset of ``mood``, ``stress``, ``sleep``, ``notes`` and ``tags``."""
    user_id = current_user_id()
    changes = CheckinUpdateSchema().load(request.get_json(silent=True) or {})
    checkin = checkin_service.update_checkin(checkin_id, user_id, changes)
    if checkin is None:
        raise NotFoundError(CHECKIN_NOT_FOUND)
    logger.info("Updated check-in %s for user %s", checkin_id, user_id)
    return success_response(CheckinSchema().dump(checkin), "Check-in updated successfully"), 200


@checkins_bp.route("/checkins/<int:checkin_id>", methods=["DELETE"])
@jwt_required()
def delete_checkin(checkin_id: int):
    user_id = current_user_id()
    if not checkin_service.delete_checkin(checkin_id, user_id):
        raise NotFoundError(CHECKIN_NOT_FOUND)
    logger.info("Deleted check-in %s for user %s", checkin_id, user_id)
    return "", 204
