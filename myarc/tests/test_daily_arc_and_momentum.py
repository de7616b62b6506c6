from datetime import date, datetime, timedelta

import pytest

from myarc.domains.arcs.models import DailyArc
from myarc.domains.arcs.services import daily_arc_service
from myarc.domains.arcs.services.momentum_service import act_score, week_start, weekly_momentum
from myarc.domains.journal.models import JournalEntry
from myarc.domains.shorts.models import Milestone, Short
from myarc.extensions import db

pytestmark = pytest.mark.integration


class TestDailyArcUpsert:
    def test_two_bumps_same_day_keep_both_increments(self, app, user):
        day = date(2026, 10, 18)
        daily_arc_service.bump_daily_arc(user.id, suggested_action="Walk 10 minutes", day=day)
        arc = daily_arc_service.bump_daily_arc(user.id, suggested_action="Call a friend", day=day)
        db.session.commit()

        assert DailyArc.query.filter_by(user_id=user.id, arc_date=day).count() == 1
        assert arc.momentum_score == 20
        assert arc.suggested_action == "Call a friend"

    def test_bump_without_action_keeps_previous_action(self, app, user):
        day = date(2026, 10, 18)
        daily_arc_service.bump_daily_arc(user.id, suggested_action="Stretch", day=day)
        arc = daily_arc_service.bump_daily_arc(user.id, day=day, step=5)
        assert arc.suggested_action == "Stretch"
        assert arc.momentum_score == 15

    def test_days_and_users_are_separate(self, app, user, other_user):
        day = date(2026, 10, 18)
        daily_arc_service.bump_daily_arc(user.id, day=day)
        daily_arc_service.bump_daily_arc(user.id, day=day + timedelta(days=1))
        daily_arc_service.bump_daily_arc(other_user.id, day=day)
        assert DailyArc.query.filter_by(user_id=user.id).count() == 2
        assert daily_arc_service.get_daily_arc(other_user.id, day).momentum_score == 10


class TestMomentum:
    def test_week_start_is_monday_midnight(self):
        assert week_start(datetime(2026, 10, 18, 15, 30)) == datetime(2026, 10, 12)

    @pytest.mark.parametrize(
        "goals, milestones, expected",
        [(0, 0, 0), (0, 1, 25), (0, 2, 50), (1, 0, 50), (1, 1, 50)],
    )
    def test_act_score(self, goals, milestones, expected):
        assert act_score(goals, milestones) == expected

    def test_seven_weeks_oldest_first(self, app, user):
        now = datetime(2026, 10, 18, 12, 0)
        this_week = datetime(2026, 10, 13, 9, 0)
        two_weeks_ago = this_week - timedelta(weeks=2)

        db.session.add(JournalEntry(user_id=user.id, title="t", content="c", created_at=this_week))
        goal = Short(
            user_id=user.id,
            category="goal",
            content="Finish course",
            status="completed",
            completed_at=this_week,
            created_at=this_week,
        )
        other_goal = Short(user_id=user.id, category="goal", content="Garden", created_at=two_weeks_ago)
        other_goal.milestones = [
            Milestone(title="dig", position=0, is_completed=True, completed_at=two_weeks_ago),
        ]
        db.session.add_all([goal, other_goal])
        db.session.commit()

        weeks = weekly_momentum(user.id, now=now)

        assert [w["week_label"] for w in weeks] == [f"WK{i}" for i in range(1, 8)]
        assert weeks[-1]["week_start"] == "2026-10-12"
        assert weeks[-1]["score"] == 100
        assert weeks[-1]["reflect"] == "100%"
        assert weeks[-1]["act"] == "100%"
        assert weeks[-1]["discover"] == "1"
        assert weeks[4]["score"] == 25
        assert weeks[4]["act"] == "50%"
        assert weeks[4]["reflect"] == "0%"
        assert weeks[0]["score"] == 0
