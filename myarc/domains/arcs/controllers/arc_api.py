"""Daily arc JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required

from myarc.domains.arcs.models import DailyArc
from myarc.domains.arcs.services import daily_arc_service

arc_api_bp = Blueprint("arc_api", __name__)


def map_arc(arc: DailyArc) -> dict:
    return {
        "id": arc.id,
        "date": arc.arc_date.isoformat(),
        "suggested_action": arc.suggested_action,
        "momentum_score": arc.momentum_score,
        "completed_actions": list(arc.completed_actions or []),
    }


@arc_api_bp.get("")
@jwt_required()
def today_arc():
    user_id = int(get_jwt_identity())
    arc = daily_arc_service.get_daily_arc(user_id)
    if not arc:
        return jsonify({"ok": True, "daily_arc": None, "is_new": True})
    return jsonify({"ok": True, "daily_arc": map_arc(arc), "is_new": False})
