"""Shorts (habit/goal/custom insights) and their goal milestones."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from myarc.domains.shorts.categories import ShortCategory
from myarc.extensions import db

SOURCE_USER = "user"
SOURCE_AI = "ai"
SOURCES = (SOURCE_USER, SOURCE_AI)

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_ARCHIVED = "archived"
STATUSES = (STATUS_ACTIVE, STATUS_COMPLETED, STATUS_ARCHIVED)


class Short(db.Model):
    __tablename__ = "shorts_short"
    __table_args__ = (
        db.Index("ix_shorts_short_user_category", "user_id", "category"),
        db.Index("ix_shorts_short_user_created_at", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    category: Mapped[str] = mapped_column(db.String(128), nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    source: Mapped[str] = mapped_column(db.String(16), nullable=False, default=SOURCE_USER)
    status: Mapped[str] = mapped_column(db.String(16), nullable=False, default=STATUS_ACTIVE)
    source_entry_id: Mapped[int | None] = mapped_column(
        db.ForeignKey("journal_entry.id", ondelete="SET NULL"), index=True
    )
    completed_at: Mapped[datetime | None] = mapped_column()
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    milestones: Mapped[list["Milestone"]] = relationship(
        "Milestone",
        back_populates="short",
        cascade="all, delete-orphan",
        order_by="Milestone.position",
    )

    @property
    def category_tag(self) -> ShortCategory:
        return ShortCategory.parse(self.category)


class Milestone(db.Model):
    __tablename__ = "shorts_milestone"

    id: Mapped[int] = mapped_column(primary_key=True)
    short_id: Mapped[int] = mapped_column(
        db.ForeignKey("shorts_short.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    is_completed: Mapped[bool] = mapped_column(default=False)
    completed_at: Mapped[datetime | None] = mapped_column()

    short: Mapped[Short] = relationship("Short", back_populates="milestones")
