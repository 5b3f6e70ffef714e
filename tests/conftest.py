"""Shared fixtures: in-memory SQLite, fake Redis and a scripted Gemini model."""

import copy
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from promptlab.config import Settings
from promptlab.databases.postgres.database import Base
import promptlab.databases.postgres.model as models
from promptlab.databases.redis import WorkspaceStore
from promptlab.services import gemini_service
from promptlab.services.gemini_service import GeminiServices


VALID_EVALUATION = {
    "role": {"status": "missing", "explanation": "No persona is assigned"},
    "action": {"status": "present", "explanation": "Asks for a summary"},
    "context": {"status": "partially present", "explanation": "Meeting notes implied"},
    "format": {"status": "missing", "explanation": "No output format"},
    "tone": {"status": "missing", "explanation": "No tone requested"},
    "techniques": [],
    "mismatches": [],
    "suggestions": [
        "Assign a role such as an executive assistant",
        "Ask for bullet points of decisions and action items",
        "Request a concise, neutral tone",
    ],
    "score": 3,
}


class FakeRedis:
    """Just enough of redis.asyncio.Redis for WorkspaceStore."""

    def __init__(self):
        self.data = {}
        self.ttls = {}
        # Set to an exception instance to make every command fail
        self.error = None

    def _check(self):
        if self.error is not None:
            raise self.error

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def setex(self, key, ttl, value):
        self._check()
        self.data[key] = value
        self.ttls[key] = ttl

    async def delete(self, key):
        self._check()
        self.data.pop(key, None)
        self.ttls.pop(key, None)


class FakeResponse:
    def __init__(self, text):
        self.text = text
        self.parts = [text] if text else []


class ScriptedGemini:
    """
    Stands in for genai.GenerativeModel. Each call pops the next outcome:
    an exception instance is raised, a string is returned as response text.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, model_name, system_instruction=None):
        scripted = self

        class _Model:
            async def generate_content_async(self, prompt, generation_config=None, safety_settings=None):
                scripted.calls.append({
                    "model": model_name,
                    "system_instruction": system_instruction,
                    "prompt": prompt,
                    "generation_config": generation_config,
                })
                outcome = scripted.outcomes.pop(0)
                if isinstance(outcome, BaseException):
                    raise outcome
                return FakeResponse(outcome)

        return _Model()


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", database_url="sqlite://")


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def script_gemini(monkeypatch):
    """Install a ScriptedGemini with the given outcomes and return it."""

    def _install(*outcomes):
        scripted = ScriptedGemini(outcomes)
        monkeypatch.setattr(gemini_service.genai, "GenerativeModel", scripted)
        monkeypatch.setattr(gemini_service.genai, "configure", lambda **kwargs: None)
        return scripted

    return _install


@pytest.fixture
def gemini(settings, sleeps):
    async def _record_sleep(seconds):
        sleeps.append(seconds)

    return GeminiServices(settings=settings, sleep=_record_sleep)


@pytest.fixture
def engine():
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(db_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def profiles(db):
    alice = models.Profile(id="user-alice", name="Alice", email="alice@example.com")
    bob = models.Profile(id="user-bob", name="Bob", email="bob@example.com")
    admin = models.Profile(id="user-admin", name="Admin", email="admin@example.com")
    db.add_all([alice, bob, admin])
    db.add(models.UserRole(user_id="user-admin", role="admin"))
    db.commit()
    return {"alice": alice, "bob": bob, "admin": admin}


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def workspace_store(fake_redis):
    return WorkspaceStore(client=fake_redis, ttl=60)


@pytest.fixture
def valid_evaluation():
    return copy.deepcopy(VALID_EVALUATION)
