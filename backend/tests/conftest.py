"""
Notekeeper Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_repo:  Fresh InMemoryNoteRepository with two seeded users
    ├── mock_repo:    AsyncMock implementing NoteRepository (failure injection)
    ├── sql_repo:     SqlAlchemyNoteRepository over a per-test SQLite file
    └── test_client:  HTTPX AsyncClient wired to the app with memory_repo injected
"""

import os
import tempfile
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any app imports
# Why: app.config builds its singleton and app.database its engine at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="notekeeper_test_"), "test.db"
)
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import create_tables
from app.repositories import NoteRepository, get_note_repository
from app.repositories.memory import InMemoryNoteRepository
from app.repositories.sql import SqlAlchemyNoteRepository

ALICE_ID = "u1"
BOB_ID = "u2"


@pytest.fixture
def memory_repo():
    """
    In-memory repository seeded with users `alice` (u1) and `bob` (u2).

    Usage:
        async def test_create(memory_repo):
            await note_service.create_note(memory_repo, "u1", "Groceries", "milk")
    """
    repo = InMemoryNoteRepository()
    repo.add_user("alice", user_id=ALICE_ID)
    repo.add_user("bob", user_id=BOB_ID)
    return repo


@pytest.fixture
def mock_repo():
    """
    AsyncMock constrained to the NoteRepository interface.

    Usage:
        mock_repo.list_notes.side_effect = DatabaseError()
    """
    return AsyncMock(spec=NoteRepository)


@pytest_asyncio.fixture
async def sql_repo(tmp_path):
    """
    SqlAlchemyNoteRepository over a fresh SQLite database file.

    Tables are created from the ORM metadata; the engine is disposed after
    the test. Yields (repository, session_factory) so tests can seed users.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await create_tables(bind=engine)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        yield SqlAlchemyNoteRepository(factory), factory
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def test_client(memory_repo):
    """
    Async HTTP test client with the in-memory repository injected.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
    """
    from app.main import app

    app.dependency_overrides[get_note_repository] = lambda: memory_repo
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
