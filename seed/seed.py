"""Seed script for initial data.

Running this script creates any missing tables and loads the default
tip catalog. It is safe to run more than once: tips are only inserted
into an empty table. The same step is available as ``flask seed-tips``.
"""
from __future__ import annotations

from wellcheck import create_app, init_db


def run_seeds() -> None:
    """Insert the default tips into the database."""
    app = create_app()
    with app.app_context():
        inserted = init_db()
        print(f"Seed data inserted successfully ({inserted} tips).")


if __name__ == "__main__":
    run_seeds()
