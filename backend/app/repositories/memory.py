"""
Notekeeper Backend — In-Memory Note Repository
================================================

What:  NoteRepository that keeps notes and users in process-local dicts.
Who:   The test suite (injected through app.dependency_overrides) and
       STORAGE_BACKEND=memory for demos without a database.
Caveat:
    Data is lost on restart and is not shared between workers. Records are
    copied on the way in and out, so callers cannot mutate stored state
    without going through save_note().
"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.repositories.base import NoteRecord, NoteRepository, UserRecord


class InMemoryNoteRepository(NoteRepository):

    def __init__(self) -> None:
        # Insertion order doubles as creation order
        self._notes: Dict[uuid.UUID, NoteRecord] = {}
        self._users: Dict[str, UserRecord] = {}

    # ── Seeding (users are managed outside this service) ──────────────────
    def add_user(self, username: str, user_id: Optional[str] = None) -> UserRecord:
        user = UserRecord(id=user_id or str(uuid.uuid4()), username=username)
        self._users[user.id] = user
        return user

    def clear(self) -> None:
        self._notes.clear()
        self._users.clear()

    # ── NoteRepository ────────────────────────────────────────────────────
    async def list_notes(self) -> List[NoteRecord]:
        return [replace(note) for note in self._notes.values()]

    async def get_note(self, note_id: uuid.UUID) -> Optional[NoteRecord]:
        note = self._notes.get(note_id)
        return replace(note) if note is not None else None

    async def find_notes_by_user(self, user_id: str) -> List[NoteRecord]:
        return [replace(note) for note in self._notes.values() if note.user == user_id]

    async def create_note(self, user_id: str, title: str, text: str) -> Optional[NoteRecord]:
        now = datetime.now(timezone.utc)
        note = NoteRecord(
            id=uuid.uuid4(),
            user=user_id,
            title=title,
            text=text,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._notes[note.id] = note
        return replace(note)

    async def save_note(self, note: NoteRecord) -> Optional[NoteRecord]:
        stored = self._notes.get(note.id)
        if stored is None:
            return None
        updated = replace(
            stored,
            user=note.user,
            title=note.title,
            text=note.text,
            completed=note.completed,
            updated_at=datetime.now(timezone.utc),
        )
        self._notes[note.id] = updated
        return replace(updated)

    async def delete_note(self, note_id: uuid.UUID) -> Optional[NoteRecord]:
        return self._notes.pop(note_id, None)

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        return replace(user) if user is not None else None

    async def ping(self) -> bool:
        return True
