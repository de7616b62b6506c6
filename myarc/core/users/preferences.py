"""Notification and privacy settings, stored as one preference row per key."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from myarc.core.users.models import User, UserPreference

SETTINGS_DEFAULTS: Dict[str, Any] = {
    "email_notifications": True,
    "daily_reminders": True,
    # Read by clients to blur entry titles and previews in list views.
    "concealed_mode": False,
}


def effective_settings(user: User) -> Dict[str, Any]:
    stored = {p.key: p.value for p in user.preferences if p.key in SETTINGS_DEFAULTS}
    return {**SETTINGS_DEFAULTS, **stored}


def apply_settings(user: User, updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Upsert the given keys onto ``user``; the caller commits."""
    rows = {p.key: p for p in user.preferences}
    for key, value in updates.items():
        if key not in SETTINGS_DEFAULTS:
            raise ValueError("validation_error")
        if key in rows:
            rows[key].value = value
        else:
            user.preferences.append(UserPreference(key=key, value=value))
    return effective_settings(user)
