import pytest

from myarc.domains.journal.services import journal_service
from myarc.domains.journal.services.prompt_service import FALLBACK_PROMPT, daily_prompt
from myarc.domains.shorts.services import short_service

pytestmark = pytest.mark.integration


def test_fallback_without_history(app, user, fake_ai):
    fake_ai.gemini.text = "Unused?"
    assert daily_prompt(user.id) == FALLBACK_PROMPT
    assert fake_ai.gemini.prompts == []


def test_fallback_when_vendor_unconfigured(app, user, fake_ai):
    journal_service.create_entry(user.id, title="t", content="c")
    fake_ai.gemini.configured = False
    assert daily_prompt(user.id) == FALLBACK_PROMPT


def test_fallback_on_vendor_failure(app, user, fake_ai):
    journal_service.create_entry(user.id, title="t", content="c")
    fake_ai.gemini.text = None
    assert daily_prompt(user.id) == FALLBACK_PROMPT


def test_prompt_uses_latest_entry_and_goals(app, user, fake_ai):
    journal_service.create_entry(user.id, title="old", content="<p>ancient history</p>")
    journal_service.create_entry(user.id, title="new", content="<p>Ran with jo@example.com</p>")
    short_service.create_short(user.id, category="goal", content="Sub-4 marathon")
    fake_ai.gemini.text = '"What made today\'s run feel different?"'

    assert daily_prompt(user.id) == "What made today's run feel different?"
    sent = fake_ai.gemini.prompts[-1]
    assert "Ran with [EMAIL]" in sent
    assert "ancient history" not in sent
    assert "Sub-4 marathon" in sent
