"""Weekly momentum: journaling consistency plus goal/milestone completion."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from myarc.domains.journal.models import JournalEntry
from myarc.domains.shorts.categories import GOAL
from myarc.domains.shorts.models import Milestone, Short
from myarc.domains.shorts.models.short_models import STATUS_COMPLETED

WEEKS = 7
CONSISTENCY_POINTS = 50
ACT_POINTS = 50
SINGLE_MILESTONE_POINTS = 25


def week_start(moment: datetime) -> datetime:
    """Monday 00:00 of the week containing ``moment``."""
    start = moment - timedelta(days=moment.weekday())
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def act_score(completed_goals: int, completed_milestones: int) -> int:
    if completed_goals >= 1 or completed_milestones >= 2:
        return ACT_POINTS
    if completed_milestones == 1:
        return SINGLE_MILESTONE_POINTS
    return 0


def weekly_momentum(user_id: int, now: Optional[datetime] = None) -> List[Dict[str, object]]:
    """Score the last seven weeks, oldest first (WK1..WK7, WK7 is current)."""
    now = now or datetime.utcnow()
    current = week_start(now)
    weeks = []
    for offset in range(WEEKS - 1, -1, -1):
        start = current - timedelta(weeks=offset)
        end = start + timedelta(weeks=1)

        entries = JournalEntry.query.filter(
            JournalEntry.user_id == user_id,
            JournalEntry.created_at >= start,
            JournalEntry.created_at < end,
        ).count()
        goals_done = Short.query.filter(
            Short.user_id == user_id,
            Short.category == GOAL.name,
            Short.status == STATUS_COMPLETED,
            Short.completed_at >= start,
            Short.completed_at < end,
        ).count()
        milestones_done = (
            Milestone.query.join(Short, Milestone.short_id == Short.id)
            .filter(
                Short.user_id == user_id,
                Short.category == GOAL.name,
                Milestone.is_completed.is_(True),
                Milestone.completed_at >= start,
                Milestone.completed_at < end,
            )
            .count()
        )
        discovered = Short.query.filter(
            Short.user_id == user_id,
            Short.created_at >= start,
            Short.created_at < end,
        ).count()

        consistency = CONSISTENCY_POINTS if entries > 0 else 0
        act = act_score(goals_done, milestones_done)
        weeks.append(
            {
                "week_label": f"WK{WEEKS - offset}",
                "week_start": start.date().isoformat(),
                "score": consistency + act,
                "reflect": "100%" if entries > 0 else "0%",
                "discover": str(discovered),
                "act": "100%" if act == ACT_POINTS else ("50%" if act == SINGLE_MILESTONE_POINTS else "0%"),
            }
        )
    return weeks
