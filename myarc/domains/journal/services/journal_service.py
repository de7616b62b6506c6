"""Journal services: create, read, delete and tag listing."""

from __future__ import annotations

import logging
from typing import List, Optional

from flask import current_app

from myarc.core.utils.encryption import get_cipher
from myarc.core.utils.storage import extract_upload_keys, get_storage
from myarc.core.utils.text import make_preview, normalize_tags, strip_html
from myarc.domains.journal.models import JournalEntry
from myarc.domains.shorts.models import Short
from myarc.extensions import db

logger = logging.getLogger(__name__)


def create_entry(user_id: int, *, title: str, content: str, tags: Optional[List[str]] = None) -> JournalEntry:
    """Persist a new entry. Enrichment runs separately and may never happen."""
    title_norm = (title or "").strip()
    if not title_norm or not strip_html(content or ""):
        raise ValueError("validation_error")

    cipher = get_cipher()
    entry = JournalEntry(
        user_id=user_id,
        title=title_norm[:255],
        content=cipher.encrypt(content) if cipher.enabled else content,
        is_encrypted=cipher.enabled,
        preview=make_preview(content, current_app.config.get("PREVIEW_MAX_CHARS", 200)),
        tags=normalize_tags(tags),
    )
    db.session.add(entry)
    db.session.commit()
    return entry


def read_content(entry: JournalEntry) -> str:
    """Return the stored content in plain form, decrypting when needed."""
    if entry.is_encrypted:
        return get_cipher().decrypt(entry.content)
    return entry.content


def get_entry(user_id: int, entry_id: int) -> Optional[JournalEntry]:
    return JournalEntry.query.filter_by(id=entry_id, user_id=user_id).first()


def latest_entry(user_id: int) -> Optional[JournalEntry]:
    return (
        JournalEntry.query.filter_by(user_id=user_id)
        .order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc())
        .first()
    )


def delete_entry(user_id: int, entry_id: int) -> bool:
    """Delete an entry and any uploaded objects only it referenced."""
    entry = get_entry(user_id, entry_id)
    if not entry:
        return False
    keys = extract_upload_keys(read_content(entry))
    Short.query.filter_by(user_id=user_id, source_entry_id=entry_id).update(
        {"source_entry_id": None}, synchronize_session="fetch"
    )
    db.session.delete(entry)
    db.session.commit()

    if keys:
        still_used = set()
        for other in JournalEntry.query.filter_by(user_id=user_id).all():
            still_used.update(extract_upload_keys(read_content(other)))
        storage = get_storage()
        for key in keys:
            if key in still_used:
                continue
            try:
                storage.delete(key)
            except (OSError, ValueError):
                logger.warning("Could not delete upload object %s for entry %s", key, entry_id)
    return True


def list_tags(user_id: int) -> List[str]:
    """Distinct tags across the user's entries."""
    tags = set()
    for (row_tags,) in db.session.query(JournalEntry.tags).filter(JournalEntry.user_id == user_id):
        tags.update(t for t in row_tags or [] if t)
    return sorted(tags, key=str.lower)
