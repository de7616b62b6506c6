"""Journal request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class JournalEntryCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)


class JournalSearchParams(BaseModel):
    q: Optional[str] = Field(default=None, max_length=500)
    tag: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class JournalEntryResponse(BaseModel):
    id: int
    title: str
    content: str
    preview: str
    tags: List[str]
    sentiment: Optional[str]
    ai_analysis: Optional[dict]
    analyzed: bool
    created_at: str
    updated_at: str
