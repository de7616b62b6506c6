"""Application configuration for MyArc."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _engine_options_from_uri(uri: str) -> dict:
    url = make_url(uri)
    # Always keep pool_pre_ping, vary connect_args by dialect.
    if url.get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}
    if url.get_backend_name() in {"postgresql", "postgres"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/myarc.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", "false")
    WTF_CSRF_ENABLED = True

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get("JWT_ACCESS_MINUTES", "30")))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get("JWT_REFRESH_DAYS", "14")))

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "true")

    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "instance/uploads")

    # At-rest encryption for entry content. Unset means plain text storage.
    ENCRYPTION_KEY = os.environ.get("ENCRYPTION_KEY", "")

    # Generative AI vendor (Gemini REST API)
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_BASE_URL = os.environ.get(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_PROMPT_MODEL = os.environ.get("GEMINI_PROMPT_MODEL", "gemini-2.0-flash")
    GEMINI_EMBEDDING_MODEL = os.environ.get("GEMINI_EMBEDDING_MODEL", "gemini-embedding-001")
    EMBEDDING_DIMENSIONS = int(os.environ.get("EMBEDDING_DIMENSIONS", "768"))
    EMBEDDING_MAX_CHARS = int(os.environ.get("EMBEDDING_MAX_CHARS", "8000"))
    AI_REQUEST_TIMEOUT_SECONDS = float(os.environ.get("AI_REQUEST_TIMEOUT_SECONDS", "30"))

    # Long-term memory vendor (Mem0 REST API)
    MEM0_API_KEY = os.environ.get("MEM0_API_KEY", "")
    MEM0_BASE_URL = os.environ.get("MEM0_BASE_URL", "https://api.mem0.ai")

    # Retrieval tuning. Context gathering is looser than search relevance.
    CONTEXT_SIMILARITY_THRESHOLD = float(os.environ.get("CONTEXT_SIMILARITY_THRESHOLD", "0.5"))
    SEARCH_SIMILARITY_THRESHOLD = float(os.environ.get("SEARCH_SIMILARITY_THRESHOLD", "0.65"))
    CONTEXT_TOP_K = int(os.environ.get("CONTEXT_TOP_K", "5"))
    PREVIEW_MAX_CHARS = int(os.environ.get("PREVIEW_MAX_CHARS", "200"))
    DAILY_ARC_MOMENTUM_STEP = int(os.environ.get("DAILY_ARC_MOMENTUM_STEP", "10"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    # Use file-backed SQLite so Alembic migrations and app share the same DB.
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///instance/test.db")
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    UPLOAD_FOLDER = "instance/test-uploads"
    # Vendors are always replaced by fakes in tests.
    GEMINI_API_KEY = ""
    MEM0_API_KEY = ""
    ENCRYPTION_KEY = ""


class ProductionConfig(BaseConfig):
    ENV = "production"
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = "Lax"


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
