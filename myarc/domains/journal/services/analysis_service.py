"""Structured entry analysis via the generative model."""

from __future__ import annotations

import logging
from typing import List, Literal, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from myarc.core.ai.clients import get_ai_clients
from myarc.core.ai.result import AIResult
from myarc.core.ai.sanitize import sanitize_for_ai
from myarc.domains.journal.services.context_service import ContextBundle

logger = logging.getLogger(__name__)

# Cross-entry evidence required before a detection is trusted.
MIN_HISTORY_FOR_HABIT = 1
MIN_HISTORY_FOR_GOAL = 2
MIN_GOAL_MILESTONES = 2
MAX_GOAL_MILESTONES = 4
MAX_TAGS = 5

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "shorts": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "category": {"type": "string", "enum": ["habit", "goal"]},
                    "content": {"type": "string"},
                    "milestones": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "2-4 concrete steps, goals only",
                    },
                },
                "required": ["category", "content"],
            },
        },
        "daily_action": {"type": "string"},
        "sentiment": {"type": "string", "enum": ["positive", "neutral", "negative"]},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["shorts", "daily_action", "sentiment", "tags"],
}

ANALYSIS_PROMPT = """You are the analysis engine of a journaling app called MyArc.
Read the NEW ENTRY together with the user's history and return JSON.

Rules:
- "habit": only report a habit when the same behaviour recurs across the new
  entry AND the PAST ENTRIES. If there is no cross-entry pattern, return no habits.
- "goal": only report a goal when the intent is repeated across multiple past
  entries. A single mention is never a goal. Give each goal 2-4 milestones.
- Never report anything already listed under TRACKED HABITS.
- "daily_action": one small action the user can take today to build momentum.
- "sentiment": positive, neutral or negative.
- "tags": 3-5 short lowercase keywords.

TRACKED HABITS:
{habits}

PAST ENTRIES:
{history}

LONG-TERM MEMORY:
{memories}

NEW ENTRY:
\"\"\"{content}\"\"\"
"""


class DetectedShort(BaseModel):
    category: Literal["habit", "goal"]
    content: str = Field(min_length=1)
    milestones: List[str] = Field(default_factory=list)


class EntryAnalysis(BaseModel):
    shorts: List[DetectedShort] = Field(default_factory=list)
    daily_action: str = ""
    sentiment: Literal["positive", "neutral", "negative"]
    tags: List[str] = Field(default_factory=list)

    @field_validator("sentiment", mode="before")
    @classmethod
    def _lower_sentiment(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("tags")
    @classmethod
    def _clip_tags(cls, value: List[str]) -> List[str]:
        return [t.strip() for t in value if t and t.strip()][:MAX_TAGS]

    @property
    def habits(self) -> List[DetectedShort]:
        return [s for s in self.shorts if s.category == "habit"]

    @property
    def goals(self) -> List[DetectedShort]:
        return [s for s in self.shorts if s.category == "goal"]


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {sanitize_for_ai(item)}" for item in items) or "(none)"


def build_prompt(content: str, context: ContextBundle, tracked_habits: Sequence[str]) -> str:
    return ANALYSIS_PROMPT.format(
        habits=_bullets(tracked_habits),
        history=_bullets(context.similar_entries),
        memories=_bullets(context.memories),
        content=sanitize_for_ai(content),
    )


def apply_detection_policy(
    analysis: EntryAnalysis,
    context: ContextBundle,
    tracked_habits: Sequence[str],
) -> EntryAnalysis:
    """Drop detections the model should not have made."""
    tracked = {h.strip().lower() for h in tracked_habits}
    kept: List[DetectedShort] = []
    seen = set()
    for short in analysis.shorts:
        content = short.content.strip()
        key = (short.category, content.lower())
        if not content or key in seen:
            continue
        if short.category == "habit":
            if context.history_count < MIN_HISTORY_FOR_HABIT or key[1] in tracked:
                continue
            short = short.model_copy(update={"content": content, "milestones": []})
        else:
            milestones = [m.strip() for m in short.milestones if m and m.strip()]
            if context.history_count < MIN_HISTORY_FOR_GOAL or len(milestones) < MIN_GOAL_MILESTONES:
                continue
            short = short.model_copy(
                update={"content": content, "milestones": milestones[:MAX_GOAL_MILESTONES]}
            )
        seen.add(key)
        kept.append(short)
    return analysis.model_copy(update={"shorts": kept})


def analyze_entry(
    content: str,
    context: ContextBundle,
    tracked_habits: Sequence[str],
) -> AIResult[EntryAnalysis]:
    """Run the model; any vendor or payload failure comes back as a non-ok result."""
    prompt = build_prompt(content, context, tracked_habits)
    result = get_ai_clients().gemini.generate_json(prompt, response_schema=ANALYSIS_RESPONSE_SCHEMA)
    if not result.is_ok:
        return AIResult(status=result.status, detail=result.detail)
    try:
        analysis = EntryAnalysis.model_validate(result.value)
    except ValidationError as exc:
        logger.warning("Analysis payload failed validation: %d errors", exc.error_count())
        return AIResult.error("analysis_invalid_payload")
    return AIResult.ok(apply_detection_policy(analysis, context, tracked_habits))
