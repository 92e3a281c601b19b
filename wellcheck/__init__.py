"""
Application factory for the Wellcheck API.

This module provides a function to create and configure the Flask
application. All extensions (SQLAlchemy, Migrate, JWT) are initialised
here and the blueprints for each part of the API are registered under
``/api/v1``.

Environment variables control the database connection, token settings
and log level. In production set ``DATABASE_URL`` and ``JWT_SECRET_KEY``
in your environment. Development falls back to a local SQLite file.
"""

from __future__ import annotations

import logging
import os
from datetime import timedelta

import click
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate

from .db import db, init_db

migrate = Migrate()
jwt = JWTManager()

API_PREFIX = "/api/v1"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once per process."""
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def create_app(test_config: dict | None = None) -> Flask:
    """Create and configure a Flask application.

    Parameters
    ----------
    test_config: dict | None, optional
        Optional configuration overrides used when running tests.

    Returns
    -------
    Flask
        A configured Flask application instance.
    """
    app = Flask(__name__)

    issuer = os.environ.get("JWT_ISSUER", "wellcheck")
    audience = os.environ.get("JWT_AUDIENCE", "wellcheck")
    app.config.update(
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL", "sqlite:///wellcheck.db"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JWT_SECRET_KEY=os.environ.get("JWT_SECRET_KEY", "please-change-this-secret-key"),
        JWT_ACCESS_TOKEN_EXPIRES=timedelta(
            minutes=int(os.environ.get("JWT_EXPIRATION_MINUTES", "1440"))
        ),
        JWT_ENCODE_ISSUER=issuer,
        JWT_DECODE_ISSUER=issuer,
        JWT_ENCODE_AUDIENCE=audience,
        JWT_DECODE_AUDIENCE=audience,
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO"),
    )

    if test_config:
        app.config.update(test_config)

    configure_logging(app.config["LOG_LEVEL"])
    app.json.sort_keys = False

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from .auth import register_jwt_callbacks
    from .errors import register_error_handlers

    register_jwt_callbacks(jwt)
    register_error_handlers(app)

    # Importing here avoids circular imports.
    from .routes.auth import auth_bp
    from .routes.checkins import checkins_bp
    from .routes.insights import insights_bp
    from .routes.reports import reports_bp
    from .routes.tips import tips_bp

    for blueprint in (auth_bp, checkins_bp, reports_bp, insights_bp, tips_bp):
        app.register_blueprint(blueprint, url_prefix=API_PREFIX)

    @app.route("/api/health")
    def health_check() -> dict[str, str]:
        """Return a simple health check response."""
        return {"status": "ok"}

    @app.cli.command("seed-tips")
    def seed_tips_command() -> None:
        """Create missing tables and load the default tip catalog."""
        inserted = init_db()
        click.echo(f"Inserted {inserted} tips.")

    return app


__all__ = ["create_app", "db", "init_db", "jwt", "migrate"]
