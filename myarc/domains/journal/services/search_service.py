"""Entry search: recency listing, vector ranking and text-match fallback."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from flask import current_app

from myarc.core.ai.embeddings import embed_text
from myarc.core.ai.ranking import rank_candidates
from myarc.core.utils.pagination import paginate, paginate_items
from myarc.domains.journal.models import JournalEntry

logger = logging.getLogger(__name__)


def _recent(user_id: int):
    return JournalEntry.query.filter(JournalEntry.user_id == user_id).order_by(
        JournalEntry.created_at.desc(), JournalEntry.id.desc()
    )


def has_tag(entry: JournalEntry, tag: Optional[str]) -> bool:
    if not tag:
        return True
    wanted = tag.strip().lower()
    return any((t or "").lower() == wanted for t in entry.tags or [])


def text_matches(entry: JournalEntry, pattern: re.Pattern) -> bool:
    """Case-insensitive match over title, preview and tags. Content may be ciphertext."""
    fields = [entry.title or "", entry.preview or "", *(entry.tags or [])]
    return any(pattern.search(value) for value in fields)


def search_entries(
    user_id: int,
    *,
    query: Optional[str] = None,
    tag: Optional[str] = None,
    page: int = 1,
    per_page: int = 20,
) -> Dict[str, Any]:
    """Return a page dict with ``items``, ``total``, ``page`` and ``has_more``."""
    query_text = (query or "").strip()
    if not query_text:
        if not tag:
            return paginate(_recent(user_id), page, per_page)
        entries = [e for e in _recent(user_id).all() if has_tag(e, tag)]
        return paginate_items(entries, page, per_page)

    entries = [e for e in _recent(user_id).all() if has_tag(e, tag)]
    pattern = re.compile(re.escape(query_text), re.IGNORECASE)

    embedded = embed_text(query_text)
    if not embedded.is_ok:
        logger.info("Search embedding %s for user %s; using text match", embedded.status, user_id)
        return paginate_items([e for e in entries if text_matches(e, pattern)], page, per_page)

    threshold = current_app.config["SEARCH_SIMILARITY_THRESHOLD"]
    ranked = rank_candidates(
        embedded.value,
        [(e, e.embedding) for e in entries if e.embedding],
        threshold,
    )
    seen = {e.id for e in ranked}
    text_only: List[JournalEntry] = [
        e for e in entries if not e.embedding and e.id not in seen and text_matches(e, pattern)
    ]
    return paginate_items(ranked + text_only, page, per_page)
