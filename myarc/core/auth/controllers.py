"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request, session
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from pydantic import ValidationError

from myarc.core.auth.auth_service import (
    authenticate_user,
    issue_tokens,
    register_user,
    set_privacy_pin,
    verify_privacy_pin,
)
from myarc.core.auth.csrf import csrf_protected, generate_csrf_token
from myarc.core.auth.schemas import LoginRequest, PinRequest, RegisterRequest, VerifyPinRequest
from myarc.core.users.schemas import serialize_user
from myarc.core.users.services import get_user
from myarc.core.utils.validation import validation_error_response
from myarc.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    payload = request.get_json(silent=True) or {}
    try:
        data = RegisterRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    try:
        user = register_user(data)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()}), 201


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    # Ensure login is stateless even if a stale Flask session cookie is present.
    session.clear()
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user = authenticate_user(data.email, data.password)
    if not user:
        return jsonify({"ok": False, "error": "invalid_credentials"}), 401
    return jsonify(
        {
            "ok": True,
            **issue_tokens(user),
            "csrf_token": generate_csrf_token(),
            "user": serialize_user(user).model_dump(),
        }
    )


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
@limiter.limit("30/minute")
def refresh():
    identity = str(get_jwt_identity())
    return jsonify({"ok": True, "access_token": create_access_token(identity=identity)})


@auth_bp.get("/me")
@jwt_required()
def me():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()})


@auth_bp.post("/pin")
@jwt_required()
@csrf_protected
def set_pin():
    payload = request.get_json(silent=True) or {}
    try:
        data = PinRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    set_privacy_pin(user, data.pin)
    return jsonify({"ok": True})


@auth_bp.post("/verify-pin")
@jwt_required()
@limiter.limit("10/minute")
def verify_pin():
    payload = request.get_json(silent=True) or {}
    try:
        data = VerifyPinRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    try:
        matched = verify_privacy_pin(user, data.pin)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    if not matched:
        return jsonify({"ok": False, "error": "incorrect_pin"}), 401
    return jsonify({"ok": True})
