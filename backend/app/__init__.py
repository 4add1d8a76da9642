"""
Notekeeper Backend — Application Package Initializer
======================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, duplicate checks
    ├─────────────────────────────────────┤
    │    Repositories (Persistence API)   │  ← NoteRepository: SQL or memory
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Routes receive the repository through FastAPI's dependency injection, so
    tests swap in InMemoryNoteRepository without touching a database.
"""

__version__ = "1.0.0"
