"""
Routes for the tip catalog.

Tips are shared by every user. Listing supports pagination and a
case-insensitive ``category`` filter; the remaining endpoints are plain
CRUD by id.
"""

from __future__ import annotations

import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from ..errors import NotFoundError
from ..responses import normalize_page_args, paginated_response, success_response
from ..schemas import TipCreateSchema, TipSchema, TipUpdateSchema
from ..services import tip_service

logger = logging.getLogger(__name__)

tips_bp = Blueprint("tips", __name__)

TIP_NOT_FOUND = "Tip not found"


@tips_bp.route("/tips", methods=["GET"])
@jwt_required()
def list_tips() -> tuple[dict, int]:
    page, page_size = normalize_page_args(
        request.args.get("page", 1), request.args.get("pageSize", 10)
    )
    category = request.args.get("category") or None
    pagination = tip_service.list_tips(page, page_size, category)
    items = TipSchema(many=True).dump(pagination.items)
    logger.info("Retrieved %d tips on page %d", len(items), page)
    return (
        paginated_response(
            items,
            pagination.total,
            page,
            page_size,
            base_path=request.path,
            extra_params={"category": category},
        ),
        200,
    )


@tips_bp.route("/tips/<int:tip_id>", methods=["GET"])
@jwt_required()
def get_tip(tip_id: int) -> tuple[dict, int]:
    tip = tip_service.get_tip(tip_id)
    if tip is None:
        raise NotFoundError(TIP_NOT_FOUND)
    return success_response(TipSchema().dump(tip)), 200


@tips_bp.route("/tips", methods=["POST"])
@jwt_required()
def create_tip() -> tuple[dict, int]:
    """Create a tip.

    Accepts ``title`` and ``description`` (required) plus optional
    ``icon``, ``color`` and ``category`` (Stress, Sleep, Mood or Wellness).
    """
    data = TipCreateSchema().load(request.get_json(silent=True) or {})
    tip = tip_service.create_tip(**data)
    logger.info("Created tip %s", tip.id)
    return success_response(TipSchema().dump(tip), "Tip created successfully"), 201


@tips_bp.route("/tips/<int:tip_id>", methods=["PUT"])
@jwt_required()
def update_tip(tip_id: int) -> tuple[dict, int]:
    changes = TipUpdateSchema().load(request.get_json(silent=True) or {})
    tip = tip_service.update_tip(tip_id, changes)
    if tip is None:
        raise NotFoundError(TIP_NOT_FOUND)
    logger.info("Updated tip %s", tip_id)
    return success_response(TipSchema().dump(tip), "Tip updated successfully"), 200


@tips_bp.route("/tips/<int:tip_id>", methods=["DELETE"])
@jwt_required()
def delete_tip(tip_id: int):
    if not tip_service.delete_tip(tip_id):
        raise NotFoundError(TIP_NOT_FOUND)
    logger.info("Deleted tip %s", tip_id)
    return "", 204
