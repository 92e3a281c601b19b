"""JWT wiring: error callbacks and the current-user helper.

Flask-JWT-Extended answers missing, malformed and expired tokens with
its own ``{"msg": ...}`` body by default. The loaders registered here
replace that with the standard error envelope so clients see one
shape for every 401.
"""
from __future__ import annotations

import logging

from flask import jsonify
from flask_jwt_extended import JWTManager, get_jwt_identity

from .responses import error_response

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Authentication required"


def register_jwt_callbacks(jwt: JWTManager) -> None:
    @jwt.unauthorized_loader
    def missing_token(reason: str):
        return jsonify(error_response(UNAUTHORIZED_MESSAGE, [reason])), 401

    @jwt.invalid_token_loader
    def invalid_token(reason: str):
        return jsonify(error_response("Invalid token", [reason])), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify(error_response("Token has expired")), 401


def current_user_id() -> int:
    """Return the authenticated user's id from the verified token.

    Raises ``PermissionError`` when the identity claim is missing or not
    an integer, which the error handlers answer with 401.
    """
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError) as exc:
        logger.warning("Token carried an unusable identity: %r", identity)
        raise PermissionError("User ID not found in token") from exc
