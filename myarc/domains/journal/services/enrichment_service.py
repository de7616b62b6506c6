"""Post-create enrichment: embed, gather context, analyze and persist results.

Runs after the entry is committed. Nothing here may fail the request that
created the entry; an entry without analysis is a normal state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from myarc.core.ai.clients import get_ai_clients
from myarc.core.ai.embeddings import embed_entry
from myarc.core.utils.text import normalize_tags, strip_html
from myarc.domains.arcs.services.daily_arc_service import bump_daily_arc
from myarc.domains.journal.models import JournalEntry
from myarc.domains.journal.services.analysis_service import EntryAnalysis, analyze_entry
from myarc.domains.journal.services.context_service import assemble_context
from myarc.domains.journal.services.journal_service import read_content
from myarc.domains.shorts.services.short_service import create_ai_shorts
from myarc.extensions import db

logger = logging.getLogger(__name__)


def enrich_entry(entry: JournalEntry) -> Optional[EntryAnalysis]:
    """Best-effort enrichment. Returns the applied analysis, if any."""
    try:
        return _enrich(entry)
    except Exception:
        db.session.rollback()
        logger.exception("Enrichment failed for entry %s", entry.id)
        return None


def _enrich(entry: JournalEntry) -> Optional[EntryAnalysis]:
    plain = strip_html(read_content(entry))

    embedded = embed_entry(entry.title, plain)
    if embedded.is_ok:
        entry.embedding = embedded.value
        db.session.commit()
    else:
        logger.info("Entry %s not embedded: %s", entry.id, embedded.detail)

    context = assemble_context(
        entry.user_id,
        embedded.value if embedded.is_ok else None,
        query_text=plain[:500],
        exclude_entry_id=entry.id,
    )
    analysis = analyze_entry(plain, context, context.habits)
    result = analysis.value if analysis.is_ok else None
    if result is None:
        logger.info("Entry %s not analyzed: %s", entry.id, analysis.detail)
    else:
        _apply_analysis(entry, result, context.history_count)

    synced = get_ai_clients().memory.add(str(entry.user_id), f"{entry.title}\n{plain}")
    if synced.status == "error":
        logger.warning("Memory sync failed for entry %s", entry.id)
    return result


def _apply_analysis(entry: JournalEntry, result: EntryAnalysis, history_count: int) -> None:
    entry.tags = normalize_tags(entry.tags, result.tags)
    entry.sentiment = result.sentiment
    entry.ai_analysis = result.model_dump(mode="json")
    entry.analyzed_at = datetime.utcnow()
    created = create_ai_shorts(entry.user_id, entry.id, result.shorts)
    bump_daily_arc(entry.user_id, suggested_action=result.daily_action or None)
    db.session.commit()
    logger.info(
        "Entry %s analyzed: %d shorts, %d tags, %d context entries",
        entry.id,
        len(created),
        len(entry.tags),
        history_count,
    )
