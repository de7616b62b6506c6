"""User-defined short categories."""

from __future__ import annotations

from typing import List, Optional, Tuple

from myarc.core.users.models import User
from myarc.domains.shorts.categories import ShortCategory
from myarc.domains.shorts.models import Short
from myarc.extensions import db


def list_categories(user: User) -> List[str]:
    return list(user.custom_categories or [])


def _stored_name(user: User, name: str) -> Optional[str]:
    lowered = name.lower()
    for existing in user.custom_categories or []:
        if existing.lower() == lowered:
            return existing
    return None


def add_category(user: User, name: str) -> List[str]:
    category = ShortCategory.custom(name)
    if _stored_name(user, category.name) is not None:
        raise ValueError("duplicate")
    # Reassign so the JSON column is flagged dirty.
    user.custom_categories = list(user.custom_categories or []) + [category.name]
    db.session.commit()
    return list(user.custom_categories)


def remove_category(user: User, name: str) -> Tuple[List[str], int]:
    """Drop a custom category and every short filed under it."""
    category = ShortCategory.custom(name)
    stored = _stored_name(user, category.name) or category.name
    user.custom_categories = [c for c in user.custom_categories or [] if c != stored]
    shorts = Short.query.filter_by(user_id=user.id, category=stored).all()
    for short in shorts:
        db.session.delete(short)
    db.session.commit()
    return list(user.custom_categories), len(shorts)
