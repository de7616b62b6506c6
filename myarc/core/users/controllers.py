"""User profile and momentum API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from myarc.core.users.schemas import ProfileUpdateRequest, serialize_user
from myarc.core.users.services import get_user, update_profile
from myarc.core.auth.csrf import csrf_protected
from myarc.core.utils.validation import validation_error_response
from myarc.domains.arcs.services import momentum_service

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.get("/profile")
@jwt_required()
def get_profile():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()})


@user_api_bp.patch("/profile")
@jwt_required()
@csrf_protected
def patch_profile():
    payload = request.get_json(silent=True) or {}
    try:
        data = ProfileUpdateRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    user = update_profile(user, data)
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()})


@user_api_bp.get("/momentum")
@jwt_required()
def get_momentum():
    user_id = int(get_jwt_identity())
    weeks = momentum_service.weekly_momentum(user_id)
    return jsonify({"ok": True, "weeks": weeks})
