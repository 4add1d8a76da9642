"""Create users and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates `users` (read by the note listing) and `notes`.
Note:  notes.user_id is indexed but has no foreign key; a note keeps its
       owner reference even if the user row is removed elsewhere.
Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.String(64),
            nullable=False,
            comment="User identifier, referenced by notes.user_id",
        ),
        sa.Column(
            "username",
            sa.String(150),
            nullable=False,
            comment="Display name attached to listed notes",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique note identifier"),
        sa.Column("user_id", sa.Text(), nullable=False, comment="Owning user's id (users.id)"),
        sa.Column("title", sa.Text(), nullable=False, comment="Note title"),
        sa.Column("text", sa.Text(), nullable=False, comment="Note body"),
        sa.Column(
            "completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
            comment="Whether the note has been marked done",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When this note was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Duplicate checks fetch a user's notes; listing joins on user_id
    op.create_index("idx_notes_user_id", "notes", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_user_id", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
