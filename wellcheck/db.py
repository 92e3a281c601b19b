"""Database setup utilities.

This module owns the shared ``db`` object used by the models and
services. The application factory binds it to the Flask app, so
nothing here opens a connection at import time.

Import ``db`` from ``wellcheck`` rather than from this module
directly.
"""
from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def init_db(seed: bool = True) -> int:
    """Create missing tables and, optionally, seed the tip catalog.

    Must run inside an application context. Returns the number of tips
    inserted (zero when the catalog was already populated).
    """
    from .services.tip_service import seed_tips

    db.create_all()
    if not seed:
        return 0
    return seed_tips()
