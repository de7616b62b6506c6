"""Typed schemas for user IO."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from myarc.core.users.preferences import effective_settings

if TYPE_CHECKING:
    from myarc.core.users.models import User

ThemeName = Literal["electric", "midnight", "solar", "boreal"]


class SettingsUpdate(BaseModel):
    email_notifications: Optional[bool] = None
    daily_reminders: Optional[bool] = None
    concealed_mode: Optional[bool] = None


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    theme_preference: Optional[ThemeName] = None
    current_focus: Optional[str] = Field(default=None, max_length=2000)
    is_onboarded: Optional[bool] = None
    settings: Optional[SettingsUpdate] = None


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    auth_provider: str
    is_onboarded: bool
    current_focus: Optional[str] = None
    theme_preference: str
    custom_categories: List[str] = []
    settings: Dict[str, Any] = {}
    has_pin: bool = False


def serialize_user(user: "User") -> UserResponse:
    """Build a UserResponse; credential and PIN hashes never leave here."""
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        image=user.image,
        auth_provider=user.auth_provider,
        is_onboarded=bool(user.is_onboarded),
        current_focus=user.current_focus,
        theme_preference=user.theme_preference,
        custom_categories=list(user.custom_categories or []),
        settings=effective_settings(user),
        has_pin=bool(user.privacy_pin_hash),
    )
