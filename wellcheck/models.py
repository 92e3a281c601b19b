"""
Database models for the Wellcheck API.

Three record kinds live here: user accounts, the check-in entries
they own, and the static tip catalog used for recommendations. A
check-in holds three ratings (mood, stress, sleep) that are always
within 1..5; the table carries CHECK constraints as a second line
behind the load schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, List

from werkzeug.security import generate_password_hash, check_password_hash

from . import db
from .util.dates import utcnow

RATING_MIN = 1
RATING_MAX = 5
TIP_CATEGORIES = ("Stress", "Sleep", "Mood", "Wellness")


class User(db.Model):
    __allow_unmapped__ = True  # allow unmapped type annotations for SQLAlchemy 2.0
    """A registered account.

    Emails are stored trimmed and lowercased so lookups can compare
    them directly. Passwords are stored as salted hashes.
    """
    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    email: str = db.Column(db.String(255), unique=True, nullable=False)
    password_hash: str = db.Column(db.String(255), nullable=False)
    name: str = db.Column(db.String(200), nullable=False)
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=utcnow)

    checkins: List[CheckinEntry] = db.relationship(
        "CheckinEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class CheckinEntry(db.Model):
    __allow_unmapped__ = True
    """A single mood/stress/sleep check-in.

    ``updated_at`` stays ``None`` until the first edit and is refreshed
    on every later one.
    """
    __tablename__ = "checkins"

    id: int = db.Column(db.Integer, primary_key=True)
    user_id: int = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mood: int = db.Column(db.Integer, nullable=False)
    stress: int = db.Column(db.Integer, nullable=False)
    sleep: int = db.Column(db.Integer, nullable=False)
    notes: Optional[str] = db.Column(db.String(1000))
    tags: List[str] = db.Column(db.JSON, nullable=False, default=list)
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at: Optional[datetime] = db.Column(db.DateTime, nullable=True)

    user: User = db.relationship("User", back_populates="checkins")

    __table_args__ = (
        db.CheckConstraint(f"mood BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_checkin_mood"),
        db.CheckConstraint(f"stress BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_checkin_stress"),
        db.CheckConstraint(f"sleep BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_checkin_sleep"),
        db.Index("ix_checkins_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CheckinEntry user={self.user_id} mood={self.mood} "
            f"stress={self.stress} sleep={self.sleep}>"
        )


class Tip(db.Model):
    __allow_unmapped__ = True
    """A piece of static advice, optionally labelled with a category."""
    __tablename__ = "tips"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(200), nullable=False)
    description: str = db.Column(db.String(1000), nullable=False)
    icon: Optional[str] = db.Column(db.String(100))
    color: Optional[str] = db.Column(db.String(50))
    category: Optional[str] = db.Column(db.String(100), index=True)
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at: Optional[datetime] = db.Column(db.DateTime, nullable=True)

    @property
    def effective_category(self) -> str:
        # uncategorised tips are treated as general wellness advice
        return self.category or "Wellness"

    def __repr__(self) -> str:
        return f"<Tip {self.title!r} ({self.category})>"
