"""Strip PII-shaped substrings before text leaves for an AI or memory vendor."""

from __future__ import annotations

import re
from typing import List, Pattern, Tuple

# URL and email run before the digit-based patterns so that digits inside
# them are not consumed by the phone pattern first. Card, SSN and IP run
# before phone for the same reason.
_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[EMAIL]"),
    (re.compile(r"https?://[^\s<>\"']+"), "[URL]"),
    (re.compile(r"\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b"), "[CARD]"),
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "[ID]"),
    (re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"), "[IP]"),
    (re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,4}"), "[PHONE]"),
]


def sanitize_for_ai(text: str) -> str:
    """Replace emails, URLs, card numbers, SSNs, IPs and phone numbers with placeholders."""
    sanitized = text or ""
    for pattern, placeholder in _PATTERNS:
        sanitized = pattern.sub(placeholder, sanitized)
    return sanitized
