"""
Note API Routes - owner-scoped CRUD for the logged-in user's notes.

Every route depends on ``get_current_user_id``, which rejects the request
before any note is touched when the session is missing or expired.
"""

from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_user_id, get_note_service
from app.schemas import MessageResponse, NoteCreate, NoteResponse, NoteUpdate
from app.services import NoteService
from app.utils.logger import setup_logger

logger = setup_logger("api.notes")

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get("", response_model=list[NoteResponse])
async def list_notes(
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """List all notes owned by the current user."""
    return await note_service.list(user_id)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: NoteCreate,
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a note; the owner always comes from the session."""
    fields = note_data.model_dump(exclude_unset=True)
    return await note_service.create(user_id, **fields)


@router.api_route("/{note_id}", methods=["PUT", "PATCH"], response_model=NoteResponse)
async def update_note(
    note_id: int,
    note_data: NoteUpdate,
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Apply a partial update to one of the current user's notes."""
    return await note_service.update(note_id, user_id, **note_data.changes())


@router.post("/{note_id}/complete", response_model=NoteResponse)
async def complete_note(
    note_id: int,
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Mark a note as done, completed today."""
    return await note_service.mark_completed(note_id, user_id)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Permanently delete one of the current user's notes."""
    await note_service.delete(note_id, user_id)
    return MessageResponse(message="Note deleted")
