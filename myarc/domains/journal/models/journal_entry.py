"""Personal journal entry."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from myarc.extensions import db


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (db.Index("ix_journal_entry_user_created_at", "user_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    # Fernet ciphertext when is_encrypted, otherwise the editor's HTML.
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    is_encrypted: Mapped[bool] = mapped_column(default=False)
    preview: Mapped[str] = mapped_column(db.String(255), nullable=False, default="")
    tags: Mapped[list] = mapped_column(db.JSON, default=list)
    sentiment: Mapped[str | None] = mapped_column(db.String(16))
    embedding: Mapped[list | None] = mapped_column(db.JSON(none_as_null=True))
    ai_analysis: Mapped[dict | None] = mapped_column(db.JSON(none_as_null=True))
    analyzed_at: Mapped[datetime | None] = mapped_column()
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
