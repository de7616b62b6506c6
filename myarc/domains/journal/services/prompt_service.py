"""Daily reflection question."""

from __future__ import annotations

import logging

from flask import current_app

from myarc.core.ai.clients import get_ai_clients
from myarc.core.ai.sanitize import sanitize_for_ai
from myarc.core.utils.encryption import CipherError
from myarc.core.utils.text import strip_html
from myarc.domains.journal.services.journal_service import latest_entry, read_content
from myarc.domains.shorts.services.short_service import active_goal_contents

logger = logging.getLogger(__name__)

FALLBACK_PROMPT = "What's on your mind today?"
LAST_ENTRY_CHARS = 500

PROMPT_TEMPLATE = """You write one short, warm reflection question for a journaling app.
Base it on the user's most recent entry and their active goals.
Return only the question, no preamble.

LAST ENTRY:
\"\"\"{entry}\"\"\"

ACTIVE GOALS:
{goals}
"""


def daily_prompt(user_id: int) -> str:
    entry = latest_entry(user_id)
    if entry is None:
        return FALLBACK_PROMPT
    client = get_ai_clients().gemini
    if not client.configured:
        return FALLBACK_PROMPT

    try:
        excerpt = strip_html(read_content(entry))[:LAST_ENTRY_CHARS]
    except CipherError:
        logger.warning("Could not decrypt entry %s for daily prompt", entry.id)
        return FALLBACK_PROMPT
    goals = "\n".join(f"- {g}" for g in active_goal_contents(user_id)) or "(none)"
    prompt = PROMPT_TEMPLATE.format(entry=sanitize_for_ai(excerpt), goals=sanitize_for_ai(goals))

    result = client.generate(prompt, model=current_app.config["GEMINI_PROMPT_MODEL"], temperature=0.9)
    if not result.is_ok:
        return FALLBACK_PROMPT
    return result.value.strip().strip('"') or FALLBACK_PROMPT
