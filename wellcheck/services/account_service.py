"""Account management: registration, login, profile and password changes.

Functions here return plain data or ``None``/``False`` for the
"credentials did not match" outcomes, and raise the exceptions from
``wellcheck.errors`` for conflicts and invalid input. Routes decide
which status code each outcome maps to.
"""
from __future__ import annotations

import logging
from typing import Optional

from flask_jwt_extended import create_access_token

from .. import db
from ..errors import ConflictError, ValidationError
from ..models import CheckinEntry, User

logger = logging.getLogger(__name__)

# Left untouched in API-testing tool templates; never a real name.
PLACEHOLDER_NAME = "string"


def _validated_name(name: str) -> str:
    trimmed = (name or "").strip()
    if not trimmed or trimmed.lower() == PLACEHOLDER_NAME:
        raise ValidationError(
            "Name must be a valid name, not a placeholder",
            {"name": ["Name must be a valid name, not a placeholder"]},
        )
    return trimmed


def _find_by_email(email: str) -> Optional[User]:
    return User.query.filter_by(email=User.normalize_email(email)).first()


def issue_token(user: User) -> str:
    """Create a signed access token for ``user``.

    The identity is the user id as a string; the email travels as an
    extra claim and Flask-JWT-Extended adds a unique ``jti``. Expiry,
    issuer and audience come from the app config.
    """
    return create_access_token(identity=str(user.id), additional_claims={"email": user.email})


def _auth_payload(user: User) -> dict:
    return {"token": issue_token(user), "user_id": user.id, "email": user.email, "name": user.name}


def register(email: str, password: str, name: str) -> dict:
    """Create an account and return ``{token, user_id, email, name}``."""
    normalized = User.normalize_email(email)
    if _find_by_email(normalized):
        raise ConflictError("Email already in use", ["Email already in use"])

    user = User(email=normalized, name=_validated_name(name))
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s", user.id)
    return _auth_payload(user)


def login(email: str, password: str) -> Optional[dict]:
    """Return an auth payload, or ``None`` when the credentials do not match."""
    user = _find_by_email(email)
    if user is None or not user.check_password(password):
        return None
    return _auth_payload(user)


def update_profile(user_id: int, name: str, email: str) -> Optional[User]:
    """Change a user's name and email. ``None`` if the user no longer exists."""
    user = db.session.get(User, user_id)
    if user is None:
        return None

    normalized = User.normalize_email(email)
    if normalized != user.email.lower():
        taken = User.query.filter(User.email == normalized, User.id != user.id).first()
        if taken:
            raise ConflictError("Email already in use", ["Email already in use"])

    user.name = _validated_name(name)
    user.email = normalized
    db.session.commit()
    return user


def update_password(user_id: int, current_password: str, new_password: str) -> bool:
    """Replace the password hash after verifying the current password.

    Returns ``False`` when the user is missing or ``current_password``
    is wrong. Raises ``ConflictError`` if the new password matches the
    one already stored.
    """
    user = db.session.get(User, user_id)
    if user is None or not user.check_password(current_password):
        return False

    if user.check_password(new_password):
        raise ConflictError(
            "New password must be different from current password",
            ["New password must be different from current password"],
        )

    user.set_password(new_password)
    db.session.commit()
    return True


def delete_account(user_id: int, password: str) -> bool:
    """Delete a user and all of their check-ins after verifying the password."""
    user = db.session.get(User, user_id)
    if user is None or not user.check_password(password):
        return False

    CheckinEntry.query.filter_by(user_id=user.id).delete(synchronize_session=False)
    db.session.delete(user)
    db.session.commit()
    return True
