"""
Authentication and account routes for the Wellcheck API.

Register and login hand out JSON Web Tokens; the remaining endpoints
let the token holder edit their profile, change their password or
delete their account together with all of its check-ins.
"""

from __future__ import annotations

import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from ..auth import current_user_id
from ..errors import AuthenticationError, NotFoundError
from ..responses import success_response
from ..schemas import (
    AuthResponseSchema,
    DeleteAccountSchema,
    LoginSchema,
    RegisterSchema,
    UpdatePasswordSchema,
    UpdateProfileSchema,
    UserSchema,
)
from ..services import account_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/auth/register", methods=["POST"])
def register() -> tuple[dict, int]:
    """Register a new user.

    Expects JSON with ``email``, ``password`` and ``name``. Emails are
    unique regardless of case. Returns a token right away so the client
    does not need a separate login.
    """
    data = RegisterSchema().load(request.get_json(silent=True) or {})
    result = account_service.register(data["email"], data["password"], data["name"])
    logger.info("User %s registered", result["user_id"])
    return success_response(AuthResponseSchema().dump(result), "User registered successfully"), 201


@auth_bp.route("/auth/login", methods=["POST"])
def login() -> tuple[dict, int]:
    """Authenticate a user and return a JWT.

    Invalid credentials return 401 without saying which part was wrong.
    """
    data = LoginSchema().load(request.get_json(silent=True) or {})
    result = account_service.login(data["email"], data["password"])
    if result is None:
        logger.warning("Failed login attempt for %s", data["email"])
        raise AuthenticationError("Invalid email or password")
    logger.info("User %s logged in", result["user_id"])
    return success_response(AuthResponseSchema().dump(result), "Login successful"), 200


@auth_bp.route("/auth/profile", methods=["PUT"])
@jwt_required()
def update_profile() -> tuple[dict, int]:
    """Update the caller's ``name`` and ``email``."""
    user_id = current_user_id()
    data = UpdateProfileSchema().load(request.get_json(silent=True) or {})
    user = account_service.update_profile(user_id, data["name"], data["email"])
    if user is None:
        raise NotFoundError("User not found")
    logger.info("User %s updated their profile", user_id)
    return success_response(UserSchema().dump(user), "Profile updated successfully"), 200


@auth_bp.route("/auth/password", methods=["PUT"])
@jwt_required()
def update_password() -> tuple[dict, int]:
    """Change the caller's password.

    Expects ``currentPassword`` and ``newPassword``. A wrong current
    password is a 401; reusing the current password is a 400.
    """
    user_id = current_user_id()
    data = UpdatePasswordSchema().load(request.get_json(silent=True) or {})
    changed = account_service.update_password(
        user_id, data["current_password"], data["new_password"]
    )
    if not changed:
        logger.warning("Failed password change for user %s", user_id)
        raise AuthenticationError("Current password is incorrect")
    logger.info("User %s changed their password", user_id)
    return success_response(message="Password updated successfully"), 200


@auth_bp.route("/auth/account", methods=["DELETE"])
@jwt_required()
def delete_account() -> tuple[dict, int]:
    """Delete the caller's account and every check-in they own.

    The password must be confirmed in the JSON body.
    """
    user_id = current_user_id()
    data = DeleteAccountSchema().load(request.get_json(silent=True) or {})
    if not account_service.delete_account(user_id, data["password"]):
        logger.warning("Failed account deletion attempt for user %s", user_id)
        raise AuthenticationError("Password is incorrect or user not found")
    logger.warning("User %s deleted their account", user_id)
    return success_response(message="Account deleted successfully"), 200
