"""MyArc application factory and bootstrap."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from flask import Flask

from myarc.config import config_by_name
from myarc.core.ai.clients import EXTENSION_KEY as AI_CLIENTS_KEY
from myarc.core.ai.clients import build_ai_clients
from myarc.core.utils.encryption import EXTENSION_KEY as CIPHER_KEY
from myarc.core.utils.encryption import EntryCipher
from myarc.core.utils.storage import EXTENSION_KEY as STORAGE_KEY
from myarc.core.utils.storage import ObjectStorage
from myarc.extensions import init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the MyArc Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    # Ensure instance folders exist (uploads, sqlite files)
    instance_root.mkdir(parents=True, exist_ok=True)
    uploads_path = Path(app.config.get("UPLOAD_FOLDER", "instance/uploads"))
    if not uploads_path.is_absolute():
        uploads_path = project_root / uploads_path
    uploads_path.mkdir(parents=True, exist_ok=True)
    app.config["UPLOAD_FOLDER"] = str(uploads_path)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and not db_uri.startswith("sqlite:////"):
        abs_path = project_root / db_uri.replace("sqlite:///", "", 1)
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    init_extensions(app)

    # Vendor clients and storage helpers are built once per process.
    app.extensions[AI_CLIENTS_KEY] = build_ai_clients(app.config)
    app.extensions[CIPHER_KEY] = EntryCipher(app.config.get("ENCRYPTION_KEY"))
    app.extensions[STORAGE_KEY] = ObjectStorage(app.config["UPLOAD_FOLDER"])

    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    # Register CLI commands
    from myarc.scripts.enrich_entries import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from myarc.core.auth.controllers import auth_bp  # local import to avoid circulars
    from myarc.core.users.controllers import user_api_bp
    from myarc.domains.arcs.controllers.arc_api import arc_api_bp
    from myarc.domains.journal.controllers.journal_api import entries_api_bp
    from myarc.domains.shorts.controllers.short_api import short_api_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(user_api_bp, url_prefix="/api/user")
    app.register_blueprint(entries_api_bp, url_prefix="/api/entries")
    app.register_blueprint(short_api_bp, url_prefix="/api/shorts")
    app.register_blueprint(arc_api_bp, url_prefix="/api/daily-arc")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """JWT failures all answer with the same 401 envelope."""

    def _unauthorized(*_args):
        return {"ok": False, "error": "unauthorized"}, 401

    jwt.unauthorized_loader(_unauthorized)
    jwt.invalid_token_loader(_unauthorized)
    jwt.expired_token_loader(_unauthorized)
    jwt.revoked_token_loader(_unauthorized)
