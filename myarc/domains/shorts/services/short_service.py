"""Short services: CRUD, milestone transitions and habit/goal lookups."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from myarc.core.users.models import User
from myarc.domains.shorts.categories import GOAL, HABIT, ShortCategory
from myarc.domains.shorts.models import Milestone, Short
from myarc.domains.shorts.models.short_models import (
    SOURCE_AI,
    SOURCE_USER,
    SOURCES,
    STATUS_ACTIVE,
    STATUS_ARCHIVED,
    STATUS_COMPLETED,
    STATUSES,
)
from myarc.domains.shorts.schemas.short_schemas import MilestoneInput
from myarc.extensions import db

MAX_MILESTONES = 12
_UNSET = object()


def list_shorts(user_id: int, *, category: Optional[str] = None) -> List[Short]:
    query = Short.query.filter(Short.user_id == user_id, Short.status != STATUS_ARCHIVED)
    if category:
        query = query.filter(Short.category == ShortCategory.parse(category).name)
    return query.order_by(Short.created_at.desc(), Short.id.desc()).all()


def get_short(user_id: int, short_id: int) -> Optional[Short]:
    return Short.query.filter_by(id=short_id, user_id=user_id).first()


def create_short(
    user_id: int,
    *,
    category: str,
    content: str,
    milestones: Optional[Sequence[str]] = None,
    source: str = SOURCE_USER,
    source_entry_id: Optional[int] = None,
    commit: bool = True,
) -> Short:
    content_norm = (content or "").strip()
    if not content_norm:
        raise ValueError("validation_error")
    if source not in SOURCES:
        raise ValueError("validation_error")
    tag = ShortCategory.parse(category)
    if not tag.is_reserved:
        user = db.session.get(User, user_id)
        if not user or tag.name not in (user.custom_categories or []):
            raise ValueError("unknown_category")

    short = Short(
        user_id=user_id,
        category=tag.name,
        content=content_norm,
        source=source,
        status=STATUS_ACTIVE,
        source_entry_id=source_entry_id,
    )
    if tag.supports_milestones:
        titles = [t.strip() for t in milestones or [] if t and t.strip()][:MAX_MILESTONES]
        short.milestones = [Milestone(title=title, position=i) for i, title in enumerate(titles)]
    db.session.add(short)
    if commit:
        db.session.commit()
    else:
        db.session.flush()
    return short


def update_short(
    user_id: int,
    short_id: int,
    *,
    content=_UNSET,
    status=_UNSET,
    milestones=_UNSET,
    now: Optional[datetime] = None,
) -> Optional[Short]:
    short = get_short(user_id, short_id)
    if not short:
        return None
    now = now or datetime.utcnow()
    if content is not _UNSET and content is not None:
        content_norm = content.strip()
        if not content_norm:
            raise ValueError("validation_error")
        short.content = content_norm
    if status is not _UNSET and status is not None:
        _apply_status(short, status, now)
    if milestones is not _UNSET and milestones is not None:
        if not short.category_tag.supports_milestones:
            raise ValueError("milestones_not_supported")
        short.milestones = merge_milestones(short.milestones, milestones, now)
    short.updated_at = now
    db.session.commit()
    return short


def delete_short(user_id: int, short_id: int) -> bool:
    short = get_short(user_id, short_id)
    if not short:
        return False
    db.session.delete(short)
    db.session.commit()
    return True


def merge_milestones(
    existing: Iterable[Milestone],
    incoming: Sequence[MilestoneInput],
    now: datetime,
) -> List[Milestone]:
    """Apply a submitted milestone list onto the stored one.

    ``completed_at`` is stamped only on the false->true edge and cleared when
    a milestone is unchecked. Items without a known id are new milestones;
    stored milestones missing from ``incoming`` are dropped.
    """
    by_id = {m.id: m for m in existing if m.id is not None}
    merged: List[Milestone] = []
    for position, item in enumerate(incoming[:MAX_MILESTONES]):
        current = by_id.pop(item.id, None) if item.id is not None else None
        was_completed = bool(current and current.is_completed)
        if current is None:
            current = Milestone()
        current.title = item.title.strip()
        current.position = position
        if item.is_completed:
            if not was_completed or current.completed_at is None:
                current.completed_at = now
        else:
            current.completed_at = None
        current.is_completed = item.is_completed
        merged.append(current)
    return merged


def active_habit_contents(user_id: int) -> List[str]:
    rows = (
        Short.query.filter_by(user_id=user_id, category=HABIT.name, status=STATUS_ACTIVE)
        .order_by(Short.created_at.desc())
        .all()
    )
    return [row.content for row in rows]


def active_goal_contents(user_id: int, limit: int = 3) -> List[str]:
    rows = (
        Short.query.filter_by(user_id=user_id, category=GOAL.name, status=STATUS_ACTIVE)
        .order_by(Short.created_at.desc())
        .limit(limit)
        .all()
    )
    return [row.content for row in rows]


def create_ai_shorts(user_id: int, entry_id: int, detections: Iterable) -> List[Short]:
    """Persist analysis detections as ``ai`` shorts without committing."""
    created = []
    for detection in detections:
        created.append(
            create_short(
                user_id,
                category=detection.category,
                content=detection.content,
                milestones=detection.milestones,
                source=SOURCE_AI,
                source_entry_id=entry_id,
                commit=False,
            )
        )
    return created


def _apply_status(short: Short, status: str, now: datetime) -> None:
    if status not in STATUSES:
        raise ValueError("validation_error")
    if status == STATUS_COMPLETED and short.status != STATUS_COMPLETED:
        short.completed_at = now
    elif status != STATUS_COMPLETED:
        short.completed_at = None
    short.status = status
