"""Session-bound CSRF token for state-changing API calls.

Login hands the token back in its JSON body; clients echo it in the
``X-CSRF-Token`` header. Disabled wholesale with ``WTF_CSRF_ENABLED = False``.
"""

from __future__ import annotations

import secrets
from functools import wraps
from typing import Callable, TypeVar

from flask import current_app, jsonify, request, session

SESSION_KEY = "_csrf_token"
HEADER_NAME = "X-CSRF-Token"

F = TypeVar("F", bound=Callable)


def generate_csrf_token() -> str:
    token = session.get(SESSION_KEY)
    if not token:
        token = secrets.token_hex(32)
        session[SESSION_KEY] = token
    return token


def validate_csrf_token(token: str) -> bool:
    expected = session.get(SESSION_KEY)
    if not token or not expected:
        return False
    return secrets.compare_digest(token, expected)


def csrf_protected(fn: F) -> F:
    """Reject the request with 403 ``csrf_failed`` unless the header matches the session."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if current_app.config.get("WTF_CSRF_ENABLED", True) and not validate_csrf_token(
            request.headers.get(HEADER_NAME, "")
        ):
            return jsonify({"ok": False, "error": "csrf_failed"}), 403
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
