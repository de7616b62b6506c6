"""User and preference models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from myarc.extensions import db

THEMES = ("electric", "midnight", "solar", "boreal")
DEFAULT_THEME = "electric"


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    # Null for accounts linked through an external identity provider.
    password_hash: Mapped[str | None] = mapped_column(db.String(255))
    auth_provider: Mapped[str] = mapped_column(db.String(32), nullable=False, default="credentials")
    name: Mapped[str | None] = mapped_column(db.String(255))
    image: Mapped[str | None] = mapped_column(db.String(1024))
    privacy_pin_hash: Mapped[str | None] = mapped_column(db.String(255))
    is_onboarded: Mapped[bool] = mapped_column(default=False)
    current_focus: Mapped[str | None] = mapped_column(db.Text)
    theme_preference: Mapped[str] = mapped_column(db.String(32), nullable=False, default=DEFAULT_THEME)
    custom_categories: Mapped[list] = mapped_column(db.JSON, default=list)

    preferences: Mapped[list["UserPreference"]] = relationship(
        "UserPreference", back_populates="user", cascade="all, delete-orphan"
    )


class UserPreference(db.Model, TimestampMixin):
    __tablename__ = "user_preference"
    __table_args__ = (db.Index("ux_user_preference_user_key", "user_id", "key", unique=True),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True)
    key: Mapped[str] = mapped_column(db.String(128), nullable=False)
    value: Mapped[dict] = mapped_column(db.JSON, nullable=False, default=dict)

    user: Mapped[User] = relationship("User", back_populates="preferences")
