import pytest

from myarc.core.ai.sanitize import sanitize_for_ai

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw, secret, token",
    [
        ("mail me at jane.doe+notes@mail.example.org today", "jane.doe+notes@mail.example.org", "[EMAIL]"),
        ("call 555-123-4567 after lunch", "555-123-4567", "[PHONE]"),
        ("read https://blog.example.com/post/2024?id=42 later", "https://blog.example.com/post/2024?id=42", "[URL]"),
        ("my ssn is 123-45-6789", "123-45-6789", "[ID]"),
        ("card 4111 1111 1111 1111 expired", "4111 1111 1111 1111", "[CARD]"),
        ("server at 192.168.10.24 went down", "192.168.10.24", "[IP]"),
    ],
)
def test_sanitizer_replaces_each_category(raw, secret, token):
    cleaned = sanitize_for_ai(raw)
    assert secret not in cleaned
    assert token in cleaned


def test_url_digits_are_not_taken_by_phone_pattern():
    cleaned = sanitize_for_ai("see https://example.com/calls/5551234567 for details")
    assert cleaned == "see [URL] for details"


def test_plain_text_is_untouched():
    text = "Ran 5km this morning and felt great."
    assert sanitize_for_ai(text) == text


def test_none_and_empty_are_safe():
    assert sanitize_for_ai("") == ""
    assert sanitize_for_ai(None) == ""
