"""
Notekeeper Backend — SQLAlchemy Note Repository
=================================================

What:  NoteRepository backed by async SQLAlchemy (PostgreSQL via asyncpg in
       production, SQLite via aiosqlite in tests).
How:   Each method opens its own session through `session_scope()`, which
       commits on success and rolls back on error. SQLAlchemy and connection
       errors are logged with context and re-raised as DatabaseError.

Query plans:
    list_notes:         SELECT * FROM notes ORDER BY created_at, id
    get_note:           primary key lookup
    find_notes_by_user: SELECT * FROM notes WHERE user_id = :user
                        → idx_notes_user_id
    get_user:           primary key lookup on users
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import session_scope
from app.exceptions import DatabaseError
from app.models.note import Note
from app.models.user import User
from app.repositories.base import NoteRecord, NoteRepository, UserRecord

logger = logging.getLogger(__name__)

# Drivers raise socket errors (ConnectionRefusedError, TimeoutError) unwrapped
# when a connection cannot be opened
STORE_ERRORS = (SQLAlchemyError, OSError)


def _to_record(note: Note) -> NoteRecord:
    return NoteRecord(
        id=note.id,
        user=note.user_id,
        title=note.title,
        text=note.text,
        completed=note.completed,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


class SqlAlchemyNoteRepository(NoteRepository):
    """
    Async SQLAlchemy implementation of NoteRepository.

    Args:
        session_factory: Factory producing AsyncSession instances. One session
            is opened per call, so concurrent calls (the owner lookups of the
            note listing) never share a session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_notes(self) -> List[NoteRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    select(Note).order_by(Note.created_at, Note.id)
                )
                return [_to_record(note) for note in result.scalars().all()]
        except STORE_ERRORS as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_note(self, note_id: uuid.UUID) -> Optional[NoteRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                note = await session.get(Note, note_id)
                return _to_record(note) if note is not None else None
        except STORE_ERRORS as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(note_id)},
            )

    async def find_notes_by_user(self, user_id: str) -> List[NoteRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    select(Note).where(Note.user_id == user_id)
                )
                return [_to_record(note) for note in result.scalars().all()]
        except STORE_ERRORS as e:
            logger.error("Database error fetching notes for user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not check for duplicate notes. Please try again.",
                context={"user_id": user_id},
            )

    async def create_note(self, user_id: str, title: str, text: str) -> Optional[NoteRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                note = Note(user_id=user_id, title=title, text=text, completed=False)
                session.add(note)
                # Flush assigns defaults (id, timestamps) before the commit
                await session.flush()
                return _to_record(note)
        except STORE_ERRORS as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

    async def save_note(self, note: NoteRecord) -> Optional[NoteRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                row = await session.get(Note, note.id)
                if row is None:
                    return None
                row.user_id = note.user
                row.title = note.title
                row.text = note.text
                row.completed = note.completed
                await session.flush()
                # Pick up updated_at from the onupdate default
                await session.refresh(row)
                return _to_record(row)
        except STORE_ERRORS as e:
            logger.error("Database error saving note %s: %s", note.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note.id)},
            )

    async def delete_note(self, note_id: uuid.UUID) -> Optional[NoteRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                row = await session.get(Note, note_id)
                if row is None:
                    return None
                # Capture before delete; the row is detached afterwards
                record = _to_record(row)
                await session.delete(row)
                return record
        except STORE_ERRORS as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id)},
            )

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                user = await session.get(User, user_id)
                if user is None:
                    return None
                return UserRecord(id=user.id, username=user.username)
        except STORE_ERRORS as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve note owners. Please try again.",
                context={"user_id": user_id},
            )

    async def ping(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(sql_text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
