"""Shorts request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class MilestoneInput(BaseModel):
    id: Optional[int] = None
    title: str = Field(min_length=1, max_length=255)
    is_completed: bool = False


class ShortCreate(BaseModel):
    category: str = Field(min_length=1, max_length=128)
    content: str = Field(min_length=1)
    milestones: List[str] = Field(default_factory=list)


class ShortUpdate(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1)
    status: Optional[Literal["active", "completed", "archived"]] = None
    milestones: Optional[List[MilestoneInput]] = None


class ShortListFilter(BaseModel):
    category: Optional[str] = None


class CategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)


class MilestoneResponse(BaseModel):
    id: int
    title: str
    is_completed: bool
    completed_at: Optional[datetime]


class ShortResponse(BaseModel):
    id: int
    category: str
    content: str
    source: str
    status: str
    source_entry_id: Optional[int]
    milestones: List[MilestoneResponse]
    completed_at: Optional[str]
    created_at: str
    updated_at: str
