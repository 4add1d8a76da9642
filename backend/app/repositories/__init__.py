# Repositories package init
"""
Notekeeper Backend — Persistence Layer
========================================

What:  NoteRepository implementations and the FastAPI dependency that
       selects one from settings.storage_backend.

Repository Inventory:
    - base.py:   NoteRepository (abstract), NoteRecord, UserRecord
    - sql.py:    SqlAlchemyNoteRepository (default, STORAGE_BACKEND=sql)
    - memory.py: InMemoryNoteRepository (STORAGE_BACKEND=memory, tests)

Tests replace the dependency instead of patching modules:
    app.dependency_overrides[get_note_repository] = lambda: fake_repo
"""

from typing import Optional

from app.config import settings
from app.repositories.base import NoteRecord, NoteRepository, UserRecord

_repository: Optional[NoteRepository] = None


def build_repository() -> NoteRepository:
    """Create the repository configured by settings.storage_backend."""
    if settings.storage_backend == "memory":
        from app.repositories.memory import InMemoryNoteRepository
        return InMemoryNoteRepository()

    from app.database import async_session_factory
    from app.repositories.sql import SqlAlchemyNoteRepository
    return SqlAlchemyNoteRepository(async_session_factory)


def get_note_repository() -> NoteRepository:
    """
    FastAPI dependency returning the process-wide repository.

    Built lazily on first use so importing the app never touches the database.
    """
    global _repository
    if _repository is None:
        _repository = build_repository()
    return _repository


__all__ = [
    "NoteRecord",
    "NoteRepository",
    "UserRecord",
    "build_repository",
    "get_note_repository",
]
