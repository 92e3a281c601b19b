"""Tip catalog: paginated listing, CRUD and one-time seeding."""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import func

from .. import db
from ..models import Tip
from ..util.dates import utcnow
from ..util.sanitization import strip_tags
from .tip_catalog import DEFAULT_TIPS

logger = logging.getLogger(__name__)


def _listing_query(category: Optional[str] = None):
    query = Tip.query
    if category and category.strip():
        query = query.filter(
            Tip.category.isnot(None), func.lower(Tip.category) == category.strip().lower()
        )
    return query.order_by(Tip.created_at.desc(), Tip.id.asc())


def list_tips(page: int, page_size: int, category: Optional[str] = None):
    """Return a Flask-SQLAlchemy pagination of tips, optionally for one category."""
    return _listing_query(category).paginate(page=page, per_page=page_size, error_out=False)


def first_tips(limit: int, category: Optional[str] = None) -> list[Tip]:
    """The first ``limit`` tips in listing order."""
    return _listing_query(category).limit(limit).all()


def get_tip(tip_id: int) -> Optional[Tip]:
    return db.session.get(Tip, tip_id)


def create_tip(
    title: str,
    description: str,
    icon: Optional[str] = None,
    color: Optional[str] = None,
    category: Optional[str] = None,
) -> Tip:
    tip = Tip(
        title=strip_tags(title),
        description=strip_tags(description),
        icon=icon,
        color=color,
        category=category,
        created_at=utcnow(),
    )
    db.session.add(tip)
    db.session.commit()
    return tip


def update_tip(tip_id: int, changes: dict[str, Any]) -> Optional[Tip]:
    """Apply ``changes`` to a tip.

    Blank titles and descriptions are ignored; ``icon``, ``color`` and
    ``category`` are applied whenever they are given and not ``None``.
    """
    tip = get_tip(tip_id)
    if tip is None:
        return None

    for field in ("title", "description"):
        value = changes.get(field)
        if value is not None and value.strip():
            setattr(tip, field, strip_tags(value))
    for field in ("icon", "color", "category"):
        if changes.get(field) is not None:
            setattr(tip, field, changes[field])

    tip.updated_at = utcnow()
    db.session.commit()
    return tip


def delete_tip(tip_id: int) -> bool:
    tip = get_tip(tip_id)
    if tip is None:
        return False
    db.session.delete(tip)
    db.session.commit()
    return True


def seed_tips() -> int:
    """Insert the default catalog if the ``tips`` table is empty.

    Safe to call on every start-up. Returns the number of tips inserted.
    """
    if db.session.query(Tip.id).first() is not None:
        return 0

    now = utcnow()
    db.session.add_all([Tip(created_at=now, **data) for data in DEFAULT_TIPS])
    db.session.commit()
    logger.info("Seeded %d tips", len(DEFAULT_TIPS))
    return len(DEFAULT_TIPS)
