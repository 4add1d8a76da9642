"""
Notekeeper Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by SqlAlchemyNoteRepository and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: generated in Python so it works on PostgreSQL and SQLite
    - user_id: plain indexed string reference to users.id. There is no foreign
      key; notes reference their owner the way documents reference each other
    - title / text: unbounded TEXT, stored as entered. Duplicate detection
      folds case and accents in the service layer, so no normalized copy is
      stored
    - completed: defaults to False on insert
    - created_at / updated_at: UTC with timezone
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A note owned by a user.

    Lifecycle:
        1. Created by POST /notes (completed = False)
        2. Mutated in place by PATCH /notes (all fields replaced)
        3. Removed by DELETE /notes (hard delete)

    Query Patterns:
        - List all notes: SELECT ... ORDER BY created_at
        - Duplicate check: SELECT ... WHERE user_id = :user
          → Uses idx_notes_user_id; title/text compared after folding
        - Get single note: SELECT ... WHERE id = :uuid (primary key)
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique note identifier",
    )

    user_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Owning user's id (users.id)",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the note has been marked done",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        comment="When this note was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, user_id='{self.user_id}', "
            f"title='{self.title}', completed={self.completed})>"
        )
