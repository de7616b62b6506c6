"""Shorts JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from myarc.core.users.services import get_user
from myarc.core.auth.csrf import csrf_protected
from myarc.core.utils.validation import validation_error_response
from myarc.domains.shorts.mappers import map_short
from myarc.domains.shorts.schemas.short_schemas import (
    CategoryRequest,
    ShortCreate,
    ShortListFilter,
    ShortUpdate,
)
from myarc.domains.shorts.services import category_service, short_service

short_api_bp = Blueprint("short_api", __name__)

_ERROR_STATUS = {
    "not_found": 404,
    "duplicate": 409,
    "reserved_category": 400,
    "unknown_category": 400,
    "milestones_not_supported": 400,
    "validation_error": 400,
}


def _error(exc: ValueError):
    code = str(exc)
    return jsonify({"ok": False, "error": code}), _ERROR_STATUS.get(code, 400)


@short_api_bp.get("")
@jwt_required()
def list_shorts():
    user_id = int(get_jwt_identity())
    try:
        filters = ShortListFilter.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return validation_error_response(exc)
    try:
        shorts = short_service.list_shorts(user_id, category=filters.category)
    except ValueError as exc:
        return _error(exc)
    return jsonify({"ok": True, "items": [map_short(s) for s in shorts]})


@short_api_bp.post("")
@jwt_required()
@csrf_protected
def create_short():
    payload = request.get_json(silent=True) or {}
    try:
        data = ShortCreate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user_id = int(get_jwt_identity())
    try:
        short = short_service.create_short(
            user_id,
            category=data.category,
            content=data.content,
            milestones=data.milestones,
        )
    except ValueError as exc:
        return _error(exc)
    return jsonify({"ok": True, "short": map_short(short)}), 201


@short_api_bp.patch("/<int:short_id>")
@jwt_required()
@csrf_protected
def update_short(short_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = ShortUpdate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user_id = int(get_jwt_identity())
    try:
        short = short_service.update_short(
            user_id,
            short_id,
            content=data.content,
            status=data.status,
            milestones=data.milestones,
        )
    except ValueError as exc:
        return _error(exc)
    if not short:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "short": map_short(short)})


@short_api_bp.delete("/<int:short_id>")
@jwt_required()
@csrf_protected
def delete_short(short_id: int):
    user_id = int(get_jwt_identity())
    if not short_service.delete_short(user_id, short_id):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})


@short_api_bp.get("/categories")
@jwt_required()
def list_categories():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "categories": category_service.list_categories(user)})


@short_api_bp.post("/categories")
@jwt_required()
@csrf_protected
def add_category():
    payload = request.get_json(silent=True) or {}
    try:
        data = CategoryRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    try:
        categories = category_service.add_category(user, data.name)
    except ValueError as exc:
        return _error(exc)
    return jsonify({"ok": True, "categories": categories}), 201


@short_api_bp.delete("/categories")
@jwt_required()
@csrf_protected
def remove_category():
    payload = request.get_json(silent=True) or {}
    try:
        data = CategoryRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    try:
        categories, removed = category_service.remove_category(user, data.name)
    except ValueError as exc:
        return _error(exc)
    return jsonify({"ok": True, "categories": categories, "removed_shorts": removed})
