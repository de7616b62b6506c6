import os
import sys
from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.orm import scoped_session, sessionmaker

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from myarc import create_app
from myarc.core.ai.clients import EXTENSION_KEY as AI_CLIENTS_KEY
from myarc.core.ai.clients import AIClients
from myarc.core.ai.result import AIResult
from myarc.core.auth.auth_service import issue_tokens, register_user
from myarc.core.auth.schemas import RegisterRequest
from myarc.extensions import db

DEFAULT_TEST_DB = ROOT / "instance" / "test.db"


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


def _test_db_url() -> str:
    return os.environ.get("TEST_DATABASE_URL") or f"sqlite:///{DEFAULT_TEST_DB}"


def _alembic_config() -> AlembicConfig:
    cfg = AlembicConfig(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "myarc" / "migrations"))
    cfg.set_main_option("myarc_env", "testing")
    cfg.set_main_option("sqlalchemy.url", _test_db_url())
    return cfg


def _enable_sqlite_savepoints(engine) -> None:
    """pysqlite only honours SAVEPOINT rollback when BEGIN is emitted explicitly."""

    @sa.event.listens_for(engine, "connect")
    def _connect(dbapi_connection, _record):
        dbapi_connection.isolation_level = None

    @sa.event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session", autouse=True)
def migrated_db():
    """Apply migrations once per session to mirror production schema."""
    if not os.environ.get("TEST_DATABASE_URL"):
        DEFAULT_TEST_DB.parent.mkdir(parents=True, exist_ok=True)
        DEFAULT_TEST_DB.unlink(missing_ok=True)
    cfg = _alembic_config()
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest.fixture()
def app(migrated_db):
    """
    Create a per-test app with an isolated database transaction.

    Each test runs inside one outer transaction; service-level commits only
    release savepoints, so everything rolls back afterwards.
    """
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()

    engine = db.engine
    if engine.dialect.name == "sqlite":
        _enable_sqlite_savepoints(engine)
    connection = engine.connect()
    transaction = connection.begin()

    original_session = db.session
    session_factory = scoped_session(
        sessionmaker(
            bind=connection,
            join_transaction_mode="create_savepoint",
            expire_on_commit=False,
        )
    )
    db.session = session_factory
    app.extensions[AI_CLIENTS_KEY] = AIClients(gemini=FakeGemini(), memory=FakeMemory())

    try:
        yield app
    finally:
        session_factory.remove()
        transaction.rollback()
        connection.close()
        db.session = original_session
        engine.dispose()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


# ==================== Fake vendors ====================


class FakeGemini:
    """Deterministic stand-in for the Gemini client.

    ``vectors`` maps a lowercase keyword to the embedding returned for any
    text containing it; unmatched text gets ``default_vector``.
    """

    def __init__(self):
        self.configured = True
        self.vectors = {}
        self.default_vector = [0.0, 0.0, 1.0]
        self.embed_available = True
        self.analysis = None
        self.text = None
        self.prompts = []
        self.embedded = []

    def embed(self, text):
        self.embedded.append(text)
        if not self.embed_available:
            return AIResult.unavailable("gemini_unconfigured")
        lowered = (text or "").lower()
        for keyword, vector in self.vectors.items():
            if keyword in lowered:
                return AIResult.ok(list(vector))
        return AIResult.ok(list(self.default_vector))

    def generate_json(self, prompt, *, response_schema=None, model=None):
        self.prompts.append(prompt)
        if self.analysis is None:
            return AIResult.unavailable("gemini_empty_response")
        if isinstance(self.analysis, Exception):
            raise self.analysis
        return AIResult.ok(self.analysis)

    def generate(self, prompt, *, model=None, response_schema=None, temperature=None):
        self.prompts.append(prompt)
        if self.text is None:
            return AIResult.error("gemini_request_failed")
        return AIResult.ok(self.text)


class FakeMemory:
    def __init__(self):
        self.configured = True
        self.memories = []
        self.added = []

    def add(self, user_id, text):
        self.added.append((user_id, text))
        return AIResult.ok(True)

    def search(self, user_id, query, limit=5):
        return AIResult.ok(list(self.memories[:limit]))


@pytest.fixture()
def fake_ai(app):
    return app.extensions[AI_CLIENTS_KEY]


# ==================== Users ====================


def make_user(email="arc-tester@example.com", name="Arc Tester", password="secret123"):
    return register_user(RegisterRequest(name=name, email=email, password=password))


@pytest.fixture()
def user(app):
    return make_user()


@pytest.fixture()
def other_user(app):
    return make_user(email="other-arc@example.com", name="Other Tester")


def auth_headers(user) -> dict[str, str]:
    tokens = issue_tokens(user)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.fixture()
def headers(user):
    return auth_headers(user)
