"""
Pytest configuration.

Each test gets a fresh SQLite database file. Concept-level tests run a
whole scenario inside one event loop and one unit of work via ``run``;
HTTP tests drive the real FastAPI app through Starlette's TestClient.
"""
import asyncio
import os

# Must be set before the settings singleton is created
os.environ.setdefault("TRACING_ENABLED", "false")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret")

import pytest
from starlette.testclient import TestClient

from concept_social.concepts import Concepts
from concept_social.config import settings
from concept_social.database import close_db, init_db, session_scope


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'concepts.db'}"


@pytest.fixture
def run(database_url):
    """
    Run ``scenario(concepts)`` against a fresh database and return its result.
    The scenario's writes are committed when it returns.
    """

    def _run(scenario, fetcher=None):
        async def main():
            await init_db(database_url)
            try:
                async with session_scope() as db:
                    return await scenario(Concepts.bind(db, fetcher))
            finally:
                await close_db()

        return asyncio.run(main())

    return _run


@pytest.fixture
def client(database_url, monkeypatch):
    monkeypatch.setattr(settings, "database_url", database_url)
    from concept_social.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.state.source_fetcher = None


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: HTTP-level tests")
