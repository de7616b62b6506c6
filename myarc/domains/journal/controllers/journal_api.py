"""Journal entries JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from myarc.core.auth.csrf import csrf_protected
from myarc.core.utils.validation import validation_error_response
from myarc.domains.journal.mappers import map_entry
from myarc.domains.journal.schemas.journal_schemas import JournalEntryCreate, JournalSearchParams
from myarc.domains.journal.services import journal_service, prompt_service, search_service
from myarc.domains.journal.services.enrichment_service import enrich_entry

entries_api_bp = Blueprint("entries_api", __name__)


@entries_api_bp.get("")
@jwt_required()
def list_entries():
    try:
        params = JournalSearchParams.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return validation_error_response(exc)
    user_id = int(get_jwt_identity())
    result = search_service.search_entries(
        user_id,
        query=params.q,
        tag=params.tag,
        page=params.page,
        per_page=params.limit,
    )
    return jsonify(
        {
            "ok": True,
            "items": [map_entry(e) for e in result["items"]],
            "total": result["total"],
            "page": result["page"],
            "has_more": result["has_more"],
        }
    )


@entries_api_bp.post("")
@jwt_required()
@csrf_protected
def create_entry():
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryCreate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    user_id = int(get_jwt_identity())
    try:
        entry = journal_service.create_entry(user_id, title=data.title, content=data.content, tags=data.tags)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    enrich_entry(entry)
    return jsonify({"ok": True, "entry": map_entry(entry)}), 201


@entries_api_bp.get("/tags")
@jwt_required()
def list_tags():
    user_id = int(get_jwt_identity())
    return jsonify({"ok": True, "tags": journal_service.list_tags(user_id)})


@entries_api_bp.get("/prompt")
@jwt_required()
def daily_prompt():
    user_id = int(get_jwt_identity())
    return jsonify({"ok": True, "prompt": prompt_service.daily_prompt(user_id)})


@entries_api_bp.get("/<int:entry_id>")
@jwt_required()
def get_entry(entry_id: int):
    entry = journal_service.get_entry(int(get_jwt_identity()), entry_id)
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "entry": map_entry(entry)})


@entries_api_bp.delete("/<int:entry_id>")
@jwt_required()
@csrf_protected
def delete_entry(entry_id: int):
    if not journal_service.delete_entry(int(get_jwt_identity()), entry_id):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
