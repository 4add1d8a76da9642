"""
Notekeeper Backend — Abstract Note Repository
===============================================

What:  Abstract base class defining the persistence contract the note
       service relies on, plus the plain records it exchanges.
Why:   The service never touches a database client directly. Any store that
       implements NoteRepository can back the API:
       - SqlAlchemyNoteRepository: PostgreSQL/SQLite through async SQLAlchemy
       - InMemoryNoteRepository: process-local dicts (tests, demos)
How:   Implementations return NoteRecord/UserRecord dataclasses, never ORM
       objects, so callers can keep using a record after its session closed.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class NoteRecord:
    """A stored note, detached from any database session."""
    id: uuid.UUID
    user: str
    title: str
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserRecord:
    id: str
    username: str


class NoteRepository(ABC):
    """
    Abstract interface for note persistence.

    Contract:
        - Lookups return None for missing records; they never raise for "absent"
        - Store failures are wrapped in DatabaseError
        - No method spans more than one operation; there are no transactions
          across calls
    """

    @abstractmethod
    async def list_notes(self) -> List[NoteRecord]:
        """Return every note, oldest first."""
        ...

    @abstractmethod
    async def get_note(self, note_id: uuid.UUID) -> Optional[NoteRecord]:
        ...

    @abstractmethod
    async def find_notes_by_user(self, user_id: str) -> List[NoteRecord]:
        """
        Return all notes owned by `user_id`.

        Used for duplicate detection: the caller compares title and text
        under its own collation rules.
        """
        ...

    @abstractmethod
    async def create_note(self, user_id: str, title: str, text: str) -> Optional[NoteRecord]:
        """
        Insert a new note with completed=False.

        Returns:
            The stored note, or None if the store did not produce a record.
        """
        ...

    @abstractmethod
    async def save_note(self, note: NoteRecord) -> Optional[NoteRecord]:
        """
        Persist every mutable field of `note` (user, title, text, completed).

        Returns:
            The saved note, or None if it no longer exists.
        """
        ...

    @abstractmethod
    async def delete_note(self, note_id: uuid.UUID) -> Optional[NoteRecord]:
        """
        Delete a note.

        Returns:
            The note as it was before deletion, or None if it did not exist.
        """
        ...

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity check for the health endpoint."""
        ...
