"""
Pytest configuration and shared fixtures.

Settings are read at import time, so the environment is prepared before any
application module is imported.
"""
import os
import tempfile
from types import SimpleNamespace

os.environ.setdefault("JWT_SECRET", "test-secret-please-change")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="interview-prep-uploads-"))
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import httpx  # noqa: E402
import pytest  # noqa: E402

import interview_prep.core.db.schemas  # noqa: E402,F401
from interview_prep.core.db.base import (  # noqa: E402
    Base,
    build_engine,
    build_session_maker,
    get_session,
    session_scope,
)
from interview_prep.modules.ai.client import GeminiClient  # noqa: E402
from main import create_app  # noqa: E402


class FakeModels:
    """Stands in for ``genai.Client().aio.models``.

    ``responses`` is consumed in order; the last entry repeats. Exceptions in
    the list are raised instead of returned.
    """

    def __init__(self):
        self.responses = []
        self.calls = []

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.responses:
            raise RuntimeError("no fake response configured")
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_models():
    return FakeModels()


@pytest.fixture
def ai_client(fake_models):
    return GeminiClient(
        api_key="test-key",
        model_name="gemini-test",
        retry_attempts=3,
        retry_base_delay=0,
        _client=SimpleNamespace(aio=SimpleNamespace(models=fake_models)),
    )


@pytest.fixture
async def session_maker(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield build_session_maker(engine)
    finally:
        await engine.dispose()


@pytest.fixture
def app(ai_client, session_maker):
    app = create_app(ai_client=ai_client)

    async def override_get_session():
        async with session_scope(session_maker) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def register_and_login(client, email="candidate@example.com", password="s3cret-pass"):
    res = await client.post(
        "/api/auth/register",
        json={"name": "Test Candidate", "email": email, "password": password},
    )
    assert res.status_code == 201, res.text
    res = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
async def auth_headers(client):
    return await register_and_login(client)


@pytest.fixture
def login_as(client):
    async def _login(email, password="s3cret-pass"):
        return await register_and_login(client, email=email, password=password)

    return _login
