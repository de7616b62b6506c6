"""Grounding context for entry analysis: similar past entries, habits, memories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from flask import current_app

from myarc.core.ai.clients import get_ai_clients
from myarc.core.ai.ranking import score_candidates
from myarc.core.utils.text import strip_html
from myarc.domains.journal.models import JournalEntry
from myarc.domains.journal.services.journal_service import read_content
from myarc.domains.shorts.services import short_service

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 500


@dataclass
class ContextBundle:
    similar_entries: List[str] = field(default_factory=list)
    habits: List[str] = field(default_factory=list)
    memories: List[str] = field(default_factory=list)

    @property
    def history_count(self) -> int:
        return len(self.similar_entries)


def similar_entries(
    user_id: int,
    embedding: Sequence[float],
    *,
    exclude_entry_id: Optional[int] = None,
    threshold: Optional[float] = None,
    limit: Optional[int] = None,
) -> List[JournalEntry]:
    """The user's past entries closest to ``embedding``, above the context threshold."""
    config = current_app.config
    threshold = config["CONTEXT_SIMILARITY_THRESHOLD"] if threshold is None else threshold
    limit = config["CONTEXT_TOP_K"] if limit is None else limit
    query = JournalEntry.query.filter(
        JournalEntry.user_id == user_id,
        JournalEntry.embedding.isnot(None),
    )
    if exclude_entry_id is not None:
        query = query.filter(JournalEntry.id != exclude_entry_id)
    candidates = [(entry, entry.embedding) for entry in query.order_by(JournalEntry.created_at.desc())]
    ranked = score_candidates(embedding, candidates, threshold)
    return [entry for entry, _score in ranked[:limit]]


def excerpt(entry: JournalEntry) -> str:
    text = strip_html(read_content(entry))[:EXCERPT_CHARS]
    return f"[{entry.created_at.date().isoformat()}] {entry.title}: {text}"


def assemble_context(
    user_id: int,
    embedding: Optional[Sequence[float]],
    *,
    query_text: str = "",
    exclude_entry_id: Optional[int] = None,
) -> ContextBundle:
    bundle = ContextBundle(habits=short_service.active_habit_contents(user_id))
    if embedding:
        bundle.similar_entries = [
            excerpt(entry)
            for entry in similar_entries(user_id, embedding, exclude_entry_id=exclude_entry_id)
        ]
    if query_text:
        memories = get_ai_clients().memory.search(str(user_id), query_text)
        if not memories.is_ok and memories.detail != "mem0_unconfigured":
            logger.warning("Memory search unavailable for user %s: %s", user_id, memories.detail)
        bundle.memories = memories.value_or([])
    return bundle
