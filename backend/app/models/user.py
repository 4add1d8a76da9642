"""
Notekeeper Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Why:   The note listing attaches each owner's username. Users are created
       and managed elsewhere; this service only reads them.
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="User identifier, referenced by notes.user_id",
    )

    username: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        unique=True,
        comment="Display name attached to listed notes",
    )

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', username='{self.username}')>"
