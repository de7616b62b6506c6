"""Daily arc upsert and lookup."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from flask import current_app
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from myarc.domains.arcs.models import DailyArc
from myarc.extensions import db

_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def today() -> date:
    return datetime.utcnow().date()


def get_daily_arc(user_id: int, day: Optional[date] = None) -> Optional[DailyArc]:
    return DailyArc.query.filter_by(user_id=user_id, arc_date=day or today()).first()


def bump_daily_arc(
    user_id: int,
    *,
    suggested_action: Optional[str] = None,
    step: Optional[int] = None,
    day: Optional[date] = None,
) -> DailyArc:
    """Create or increment the user's arc for ``day`` in one statement.

    The read-modify-write happens inside ``INSERT .. ON CONFLICT DO UPDATE`` so
    concurrent bumps on the same day both land. Does not commit.
    """
    day = day or today()
    if step is None:
        step = int(current_app.config.get("DAILY_ARC_MOMENTUM_STEP", 10))
    now = datetime.utcnow()
    dialect = db.session.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"daily arc upsert not supported on {dialect}")

    table = DailyArc.__table__
    stmt = insert(table).values(
        user_id=user_id,
        arc_date=day,
        suggested_action=suggested_action,
        momentum_score=step,
        completed_actions=[],
        created_at=now,
        updated_at=now,
    )
    update_set = {"momentum_score": table.c.momentum_score + step, "updated_at": now}
    if suggested_action:
        update_set["suggested_action"] = stmt.excluded.suggested_action
    stmt = stmt.on_conflict_do_update(index_elements=["user_id", "arc_date"], set_=update_set)
    db.session.execute(stmt)

    return (
        DailyArc.query.filter_by(user_id=user_id, arc_date=day)
        .populate_existing()
        .one()
    )
