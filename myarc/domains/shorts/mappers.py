"""Shorts mappers for DTO responses."""

from __future__ import annotations

from myarc.domains.shorts.models import Short
from myarc.domains.shorts.schemas.short_schemas import MilestoneResponse, ShortResponse


def map_short(short: Short) -> dict:
    return ShortResponse(
        id=short.id,
        category=short.category,
        content=short.content,
        source=short.source,
        status=short.status,
        source_entry_id=short.source_entry_id,
        milestones=[
            MilestoneResponse(
                id=m.id,
                title=m.title,
                is_completed=m.is_completed,
                completed_at=m.completed_at,
            )
            for m in short.milestones
        ],
        completed_at=short.completed_at.isoformat() if short.completed_at else None,
        created_at=short.created_at.isoformat() if short.created_at else "",
        updated_at=short.updated_at.isoformat() if short.updated_at else "",
    ).model_dump(mode="json")
