"""
Notekeeper Backend — Notes Route Handlers
===========================================

What:  GET/POST/PATCH/DELETE /notes.
How:   Extracts the JSON body, delegates to NoteService with the injected
       repository, and sets the status code. Failures are raised as
       application exceptions and rendered by the global handlers in main.py.

Bodies are optional at the HTTP level: a request without a body reaches the
service with every field missing and gets the service's field-specific 400.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.repositories import NoteRepository, get_note_repository
from app.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteDeleteRequest,
    NoteUpdateRequest,
    NoteWithUsername,
)
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteWithUsername],
    responses={
        200: {"description": "All notes, each with its owner's username"},
        400: {"description": "No notes found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes",
)
async def list_notes(
    repo: NoteRepository = Depends(get_note_repository),
) -> List[NoteWithUsername]:
    return await note_service.list_notes(repo)


@router.post(
    "/notes",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing field or invalid data", "model": ErrorResponse},
        409: {"description": "Duplicate note", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteCreateRequest] = None,
    repo: NoteRepository = Depends(get_note_repository),
) -> MessageResponse:
    payload = payload or NoteCreateRequest()
    return await note_service.create_note(
        repo,
        user=payload.user,
        title=payload.title,
        text=payload.text,
    )


@router.patch(
    "/notes",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing field or note not found", "model": ErrorResponse},
        409: {"description": "Duplicate note", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    payload: Optional[NoteUpdateRequest] = None,
    repo: NoteRepository = Depends(get_note_repository),
) -> MessageResponse:
    payload = payload or NoteUpdateRequest()
    return await note_service.update_note(
        repo,
        note_id=payload.id,
        user=payload.user,
        title=payload.title,
        text=payload.text,
        completed=payload.completed,
    )


@router.delete(
    "/notes",
    response_model=str,
    responses={
        200: {"description": "Confirmation naming the deleted note"},
        400: {"description": "Missing id or note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    payload: Optional[NoteDeleteRequest] = None,
    repo: NoteRepository = Depends(get_note_repository),
) -> str:
    payload = payload or NoteDeleteRequest()
    return await note_service.delete_note(repo, note_id=payload.id)
