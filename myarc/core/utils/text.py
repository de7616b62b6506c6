"""Plain-text helpers for rich-text entry content."""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&[^;\s]+;")
_WS_RE = re.compile(r"\s+")


def strip_html(html: str) -> str:
    text = _TAG_RE.sub(" ", html or "")
    text = _ENTITY_RE.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


def make_preview(html: str, max_chars: int = 200) -> str:
    text = strip_html(html)
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3].rstrip() + "..."


def normalize_tags(*groups) -> list[str]:
    """Merge tag lists keeping first-seen order; duplicates compare case-insensitively."""
    merged: list[str] = []
    seen: set[str] = set()
    for group in groups:
        for tag in group or []:
            if not isinstance(tag, str):
                continue
            cleaned = tag.strip()
            if cleaned and cleaned.lower() not in seen:
                seen.add(cleaned.lower())
                merged.append(cleaned)
    return merged
