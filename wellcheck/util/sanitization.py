"""Sanitisation helpers for free-text check-in and tip fields.

Notes and tags come straight from clients and may later be rendered
in a web view, so HTML tags are stripped before storage.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional

TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(text: Optional[str]) -> str:
    """Remove HTML tags from ``text`` and trim surrounding whitespace."""
    if not text:
        return ""
    return TAG_RE.sub("", text).strip()


def clean_notes(text: Optional[str]) -> Optional[str]:
    """Sanitise an optional note, mapping empty results to ``None``."""
    if text is None:
        return None
    cleaned = strip_tags(text)
    return cleaned or None


def clean_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Sanitise a list of tags, keeping order and dropping blank ones."""
    if not tags:
        return []
    cleaned = (strip_tags(tag) for tag in tags)
    return [tag for tag in cleaned if tag]
