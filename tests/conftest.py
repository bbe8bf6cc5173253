import json
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import AsyncIterator, Iterator, List

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlmodel import Session, SQLModel, create_engine

from daywise.core import database as core_database
from daywise.core.config import Settings
from daywise.core.database import get_session
from daywise.main import create_app
from daywise.routers.ai.llm import OllamaGateway
from daywise.routers.ai.services import SuggestionService, get_suggestion_service

OLLAMA_TEST_URL = "http://ollama.test"


class FakeOllama:
    """Stands in for the Ollama HTTP API behind an ``httpx.MockTransport``."""

    def __init__(self):
        self.healthy = True
        self.reply = "Here are some ideas:\n\n1. For breakfast, try Greek yoghurt with berries"
        self.generate_status = 200
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/tags":
            if not self.healthy:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"models": [{"name": "llama3.2:latest"}]})
        if request.url.path == "/api/generate":
            if self.generate_status != 200:
                return httpx.Response(self.generate_status, text="model crashed")
            return httpx.Response(200, json={"model": "llama3.2:latest", "response": self.reply, "done": True})
        return httpx.Response(404)

    @property
    def prompts(self) -> List[str]:
        return [json.loads(r.content)["prompt"] for r in self.requests if r.url.path == "/api/generate"]


@pytest.fixture
def fake_ollama() -> FakeOllama:
    return FakeOllama()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ollama_url=OLLAMA_TEST_URL, ai_llm_enabled=True, ollama_structured_output=False)


@pytest.fixture
def service(fake_ollama: FakeOllama, test_settings: Settings) -> SuggestionService:
    gateway = OllamaGateway.from_settings(test_settings, transport=httpx.MockTransport(fake_ollama))
    return SuggestionService(gateway, test_settings)


@pytest.fixture(scope="function")
def test_app(monkeypatch, service: SuggestionService) -> Iterator[FastAPI]:
    # Use a fresh SQLite DB file in a temp dir per test for isolation
    tmp = tempfile.TemporaryDirectory()
    db_path = Path(tmp.name) / "test.db"
    db_url = f"sqlite:///{db_path}"

    engine = create_engine(db_url, connect_args={"check_same_thread": False})

    # Initialize tables
    from daywise.models import meals  # noqa: F401
    SQLModel.metadata.create_all(engine)

    def _override_get_session():
        with Session(engine) as session:
            yield session

    # patch global engine/init_db so startup hooks operate on the test database
    monkeypatch.setattr(core_database, "engine", engine, raising=False)

    def _init_db():
        SQLModel.metadata.create_all(engine)

    monkeypatch.setattr(core_database, "init_db", _init_db, raising=False)

    app = create_app()
    app.dependency_overrides[get_session] = _override_get_session
    app.dependency_overrides[get_suggestion_service] = lambda: service

    try:
        yield app
    finally:
        app.dependency_overrides.clear()
        with suppress(Exception):
            engine.dispose()
        tmp.cleanup()


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def db_session(test_app: FastAPI):
    override = test_app.dependency_overrides[get_session]
    generator = override()
    session = next(generator)
    try:
        yield session
    finally:
        with suppress(StopIteration):
            next(generator)
