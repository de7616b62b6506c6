"""Once-per-day suggested action and momentum counter."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column

from myarc.extensions import db


class DailyArc(db.Model):
    __tablename__ = "arcs_daily_arc"
    __table_args__ = (
        db.UniqueConstraint("user_id", "arc_date", name="ux_arcs_daily_arc_user_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    arc_date: Mapped[date] = mapped_column(nullable=False)
    suggested_action: Mapped[str | None] = mapped_column(db.Text)
    momentum_score: Mapped[int] = mapped_column(nullable=False, default=0)
    completed_actions: Mapped[list] = mapped_column(db.JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
