"""Centralised error handling and custom exceptions.

Services raise the exceptions defined here to signal specific error
conditions without knowing about HTTP. The handlers registered by
``register_error_handlers`` serialise them, together with marshmallow
validation failures, JWT failures and anything unexpected, into the
standard ``{success, data, message, errors}`` envelope.
"""
from __future__ import annotations

import logging

from flask import jsonify
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

from .responses import error_response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


class APIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_response(self, status_code: int | None = None):
        body = error_response(self.message, self.errors)
        return jsonify(body), status_code or self.status_code


class ValidationError(APIError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(self, message: str, fields: dict | None = None) -> None:
        self.fields = fields or {}
        super().__init__(message, _flatten_field_messages(self.fields))


class AuthenticationError(APIError):
    """Raised for bad credentials. Carries no detail to avoid enumeration."""

    status_code = 401


class ForbiddenError(APIError):
    """Raised when the caller asks for data that belongs to another user."""

    status_code = 403


class NotFoundError(APIError):
    """Raised when a requested resource cannot be found, or is not yours."""

    status_code = 404


class ConflictError(APIError):
    """Raised for duplicate emails and other state conflicts (HTTP 400)."""

    status_code = 400


def _flatten_field_messages(fields: dict, prefix: str = "") -> list[str]:
    """Turn marshmallow's nested ``{field: [messages]}`` into flat strings."""
    messages: list[str] = []
    for field, value in fields.items():
        name = f"{prefix}{field}"
        if isinstance(value, dict):
            messages.extend(_flatten_field_messages(value, prefix=f"{name}."))
        elif isinstance(value, (list, tuple)):
            messages.extend(f"{name}: {msg}" for msg in value)
        else:
            messages.append(f"{name}: {value}")
    return messages


def register_error_handlers(app) -> None:
    """Register custom error handlers on the given Flask app."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return err.to_response()

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(err: SchemaValidationError):
        fields = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        return ValidationError("Validation failed", fields).to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify(error_response(err.description or err.name)), err.code

    @app.errorhandler(ValueError)
    def handle_value_error(err: ValueError):
        return jsonify(error_response(str(err), [str(err)])), 400

    @app.errorhandler(PermissionError)
    def handle_permission_error(err: PermissionError):
        return jsonify(error_response("Unauthorized access.", [str(err)])), 401

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("An unhandled exception occurred")
        return jsonify(error_response(GENERIC_ERROR_MESSAGE)), 500
