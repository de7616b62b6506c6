"""User service layer."""

from __future__ import annotations

from typing import Optional

from myarc.core.users.models import User
from myarc.core.users.preferences import apply_settings
from myarc.core.users.schemas import ProfileUpdateRequest
from myarc.extensions import db


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def update_profile(user: User, payload: ProfileUpdateRequest) -> User:
    if payload.name:
        user.name = payload.name.strip()
    if payload.theme_preference:
        user.theme_preference = payload.theme_preference
    if payload.current_focus:
        user.current_focus = payload.current_focus.strip()
    if payload.is_onboarded is not None:
        user.is_onboarded = payload.is_onboarded
    if payload.settings is not None:
        apply_settings(user, payload.settings.model_dump(exclude_none=True))
    db.session.commit()
    return user
