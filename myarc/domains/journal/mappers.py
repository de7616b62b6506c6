"""Journal mappers for DTO responses."""

from __future__ import annotations

from myarc.domains.journal.models import JournalEntry
from myarc.domains.journal.schemas.journal_schemas import JournalEntryResponse
from myarc.domains.journal.services.journal_service import read_content


def map_entry(entry: JournalEntry) -> dict:
    """Serialize an entry with decrypted content. The embedding is never included."""
    return JournalEntryResponse(
        id=entry.id,
        title=entry.title,
        content=read_content(entry),
        preview=entry.preview or "",
        tags=entry.tags or [],
        sentiment=entry.sentiment,
        ai_analysis=entry.ai_analysis,
        analyzed=entry.analyzed_at is not None,
        created_at=entry.created_at.isoformat() if entry.created_at else "",
        updated_at=entry.updated_at.isoformat() if entry.updated_at else "",
    ).model_dump()
