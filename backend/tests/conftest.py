"""
Test configuration and fixtures
"""

import os
import sys
import tempfile

import httpx
import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Keep the test database and logs out of the project tree; must happen before
# the app resolves its data/log directories.
_TEST_ROOT = tempfile.mkdtemp(prefix="command_assistant_tests_")
os.environ.setdefault("DATA_DIR", os.path.join(_TEST_ROOT, "data"))
os.environ.setdefault("LOGS_DIR", os.path.join(_TEST_ROOT, "logs"))

from command_assistant.core.database import drop_db, get_session_local, init_db  # noqa: E402
from command_assistant.core.settings_db import AISettingsStore  # noqa: E402
from command_assistant.models import AISettings  # noqa: E402
from command_assistant.services.ai_providers import transport  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def database():
    """Create the tables once for the run and drop them when it ends."""
    init_db()
    yield
    drop_db()


@pytest.fixture
def db_session():
    """Database session on a fresh ai_settings table; rows are removed afterwards."""
    init_db()
    SessionLocal = get_session_local()
    db = SessionLocal()
    db.query(AISettings).delete()
    db.commit()
    try:
        yield db
    finally:
        db.rollback()
        db.query(AISettings).delete()
        db.commit()
        db.close()


@pytest.fixture
def store(db_session):
    return AISettingsStore(db_session)


@pytest.fixture
def provider_http(monkeypatch):
    """
    Route provider HTTP calls to a handler instead of the network.

    Usage: requests = provider_http(handler) where handler(request) returns an
    httpx.Response or raises an httpx error. Sent requests are recorded.
    """

    def install(handler):
        sent = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return handler(request)

        monkeypatch.setattr(
            transport,
            "create_http_client",
            lambda timeout=None: httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)),
        )
        return sent

    return install


@pytest.fixture
def openai_models_payload():
    """OpenAI /models listing with chat and non-chat models."""
    return {
        "object": "list",
        "data": [
            {"id": "gpt-4o", "object": "model"},
            {"id": "whisper-1", "object": "model"},
            {"id": "gpt-3.5-turbo-instruct", "object": "model"},
            {"id": "text-embedding-3-small", "object": "model"},
            {"id": "gpt-4o-mini-tts", "object": "model"},
            {"id": "dall-e-3", "object": "model"},
            {"id": "gpt-3.5-turbo", "object": "model"},
            {"id": "gpt-4-edit-preview", "object": "model"},
            {"id": "gpt-4o-mini", "object": "model"},
        ],
    }


@pytest.fixture
def ollama_tags_payload():
    """Ollama /api/tags listing."""
    return {
        "models": [
            {"name": "llama3:8b", "size": 4661224676},
            {"name": "qwen2.5-coder:7b", "size": 4683087332},
            {"name": "", "size": 0},
        ]
    }
