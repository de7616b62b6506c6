"""Pagination helpers for SQLAlchemy queries and merged result lists."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from sqlalchemy.orm import Query

MAX_PER_PAGE = 100


def _window(page: int, per_page: int) -> tuple[int, int, int]:
    page = max(page, 1)
    per_page = max(min(per_page, MAX_PER_PAGE), 1)
    return page, per_page, (page - 1) * per_page


def paginate(query: Query, page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    page, per_page, skip = _window(page, per_page)
    items = query.limit(per_page).offset(skip).all()
    total = query.order_by(None).count()
    return {
        "items": items,
        "page": page,
        "per_page": per_page,
        "total": total,
        "has_more": skip + len(items) < total,
    }


def paginate_items(items: Sequence[Any], page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    page, per_page, skip = _window(page, per_page)
    window = list(items[skip : skip + per_page])
    total = len(items)
    return {
        "items": window,
        "page": page,
        "per_page": per_page,
        "total": total,
        "has_more": skip + len(window) < total,
    }
