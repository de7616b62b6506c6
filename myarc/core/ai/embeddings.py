"""Embedding helpers for entries and search queries."""

from __future__ import annotations

from typing import List, Optional

from myarc.core.ai.clients import get_ai_clients
from myarc.core.ai.result import AIResult


def embed_text(text: str) -> AIResult[List[float]]:
    """Embed text with the configured vendor; ``unavailable`` when it cannot."""
    return get_ai_clients().gemini.embed(text)


def embed_entry(title: Optional[str], plain_text: str) -> AIResult[List[float]]:
    return embed_text(f"{title or ''} {plain_text}".strip())
