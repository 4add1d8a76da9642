"""
Notekeeper Backend — Note Service (Business Logic)
====================================================

What:  The four note handlers: list, create, update, delete.
Why:   Keeps validation, duplicate detection, and reply shaping independent
       of HTTP; routes only translate bodies and status codes.
How:   Every method receives the NoteRepository to use, so the same service
       runs against SQL in production and the in-memory store in tests.

Validation order:
    create: user → title → text (first missing field wins)
    update: all five fields at once; `completed` must be a real boolean
    delete: id

Duplicate detection:
    A note is a duplicate when another note of the same user has a title and
    text that are equal under the configured collation strength. The check
    and the following write are separate repository calls with no isolation,
    so two concurrent requests can both pass the check.
"""

import asyncio
import logging
import uuid
from typing import Any, List, Optional

from app.config import settings
from app.exceptions import DuplicateNoteError, NotFoundError, ValidationError
from app.repositories.base import NoteRecord, NoteRepository
from app.schemas.note import MessageResponse, NoteWithUsername
from app.services.collation import collation_equal

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    """A field is missing when absent, null, or an empty string."""
    return not isinstance(value, str) or value == ""


def _parse_note_id(value: Any) -> Optional[uuid.UUID]:
    """Note ids are UUIDs; anything unparseable cannot match a note."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _note_not_found(note_id: Any) -> NotFoundError:
    """
    Not-found error for a single note.

    Clients of the 400 status match on the legacy "User not found" text; the
    conventional "Note not found" comes with NOT_FOUND_STATUS_CODE=404.
    """
    message = "Note not found" if settings.not_found_status_code == 404 else "User not found"
    return NotFoundError(message=message, resource_id=str(note_id))


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        collation_strength: Overrides settings.collation_strength
            (1 = ignore case and accents, 2 = ignore case, 3 = exact).
    """

    def __init__(self, collation_strength: Optional[int] = None):
        self._collation_strength = collation_strength

    @property
    def collation_strength(self) -> int:
        if self._collation_strength is not None:
            return self._collation_strength
        return settings.collation_strength

    async def find_duplicate(
        self,
        repo: NoteRepository,
        user: str,
        title: str,
        text: str,
    ) -> Optional[NoteRecord]:
        """Return a note of `user` whose title and text collate equal, if any."""
        strength = self.collation_strength
        for note in await repo.find_notes_by_user(user):
            if collation_equal(note.title, title, strength) and collation_equal(
                note.text, text, strength
            ):
                return note
        return None

    async def list_notes(self, repo: NoteRepository) -> List[NoteWithUsername]:
        """
        Return every note with its owner's username attached.

        Owner lookups run concurrently, one per note (repeated owners are
        looked up again). If any lookup raises, the whole listing fails.

        Raises:
            NotFoundError: There are no notes at all.
        """
        notes = await repo.list_notes()
        if not notes:
            raise NotFoundError(message="No notes found")

        owners = await asyncio.gather(*(repo.get_user(note.user) for note in notes))

        items = []
        for note, owner in zip(notes, owners):
            if owner is None:
                logger.warning("Note %s references unknown user %s", note.id, note.user)
            items.append(
                NoteWithUsername(
                    **note.to_dict(),
                    username=owner.username if owner is not None else None,
                )
            )
        return items

    async def create_note(
        self,
        repo: NoteRepository,
        user: Any,
        title: Any,
        text: Any,
    ) -> MessageResponse:
        """
        Validate and insert a new note.

        Raises:
            ValidationError: A field is missing, or the store returned no record.
            DuplicateNoteError: The user already has an equal note.
        """
        if _is_missing(user):
            raise ValidationError(message="User field is required", field="user")
        if _is_missing(title):
            raise ValidationError(message="Title field is required", field="title")
        if _is_missing(text):
            raise ValidationError(message="Text field is required", field="text")

        duplicate = await self.find_duplicate(repo, user, title, text)
        if duplicate is not None:
            logger.info("Rejected duplicate note for user %s (matches %s)", user, duplicate.id)
            raise DuplicateNoteError(existing_id=str(duplicate.id))

        note = await repo.create_note(user, title, text)
        if note is None:
            raise ValidationError(message="Invalid note data received")

        logger.info("Note %s created for user %s", note.id, user)
        return MessageResponse(message=f"New note {title} created")

    async def update_note(
        self,
        repo: NoteRepository,
        note_id: Any,
        user: Any,
        title: Any,
        text: Any,
        completed: Any,
    ) -> MessageResponse:
        """
        Replace every field of an existing note.

        Matching the note's own current values is not a conflict.

        Raises:
            ValidationError: Any field missing, or `completed` not a boolean.
            NotFoundError: No note has this id.
            DuplicateNoteError: A different note of the user is equal.
        """
        if (
            note_id is None
            or note_id == ""
            or _is_missing(user)
            or _is_missing(title)
            or _is_missing(text)
            or not isinstance(completed, bool)
        ):
            raise ValidationError(message="All fields are required")

        parsed_id = _parse_note_id(note_id)
        note = await repo.get_note(parsed_id) if parsed_id is not None else None
        if note is None:
            raise _note_not_found(note_id)

        duplicate = await self.find_duplicate(repo, user, title, text)
        if duplicate is not None and duplicate.id != note.id:
            logger.info("Rejected update of %s: duplicates %s", note.id, duplicate.id)
            raise DuplicateNoteError(existing_id=str(duplicate.id))

        note.user = user
        note.title = title
        note.text = text
        note.completed = completed

        updated = await repo.save_note(note)
        if updated is None:
            # Deleted between the lookup and the save
            raise _note_not_found(note.id)

        logger.info("Note %s updated", updated.id)
        return MessageResponse(message=f"{updated.title} updated")

    async def delete_note(self, repo: NoteRepository, note_id: Any) -> str:
        """
        Delete a note and describe what was removed.

        Returns:
            "Note <title> with ID <id> deleted", built from the record the
            repository captured before deleting it.

        Raises:
            ValidationError: No id given.
            NotFoundError: No note has this id.
        """
        if note_id is None or note_id == "":
            raise ValidationError(message="Note ID Required", field="id")

        parsed_id = _parse_note_id(note_id)
        note = await repo.get_note(parsed_id) if parsed_id is not None else None
        if note is None:
            raise _note_not_found(note_id)

        deleted = await repo.delete_note(note.id)
        if deleted is None:
            raise _note_not_found(note.id)

        logger.info("Note %s deleted", deleted.id)
        return f"Note {deleted.title} with ID {deleted.id} deleted"


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless apart from the optional strength override
note_service = NoteService()
