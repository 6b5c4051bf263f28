"""
Note ownership store.

CRUD over notes, always scoped to the acting user. No operation accepts an
owner id from the client: the caller passes the id returned by
``AuthService.authenticate``. A note that does not exist and a note owned by
someone else both produce the same ``NotFound``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.exceptions import NotFound, ValidationError
from app.models.note import NoteStatus
from app.schemas import NoteCreate, NoteResponse, NoteUpdate
from app.utils.logger import setup_logger

logger = setup_logger("note_service")

NOTE_NOT_FOUND = "Note not found"
# Largest value the INTEGER id column holds on every supported backend
MAX_NOTE_ID = 2**31 - 1


class NoteService:
    def __init__(self, notes, today: Callable[[], date] = date.today):
        self.notes = notes
        self.today = today

    @staticmethod
    def _check_id(note_id: int) -> None:
        # No row carries an id outside the INTEGER column range
        if not 1 <= note_id <= MAX_NOTE_ID:
            raise NotFound(NOTE_NOT_FOUND)

    async def list(self, user_id: int) -> list[NoteResponse]:
        notes = await self.notes.list_by_owner(user_id)
        return [NoteResponse.model_validate(note) for note in notes]

    async def create(self, user_id: int, **fields: Any) -> NoteResponse:
        """Validate and store a note owned by ``user_id``.

        Accepts ``title``, ``created_date``, ``completed_date`` and ``status``;
        any ``user_id`` among the fields is ignored.
        """
        try:
            data = NoteCreate(**fields)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, NoteCreate) from None

        note = await self.notes.create(
            {
                "user_id": user_id,
                "title": data.title,
                "created_date": data.created_date or self.today(),
                "completed_date": data.completed_date,
                "status": data.status.value,
            }
        )
        logger.info(f"Created note {note.id} for user {user_id}")
        return NoteResponse.model_validate(note)

    async def get(self, note_id: int, user_id: int) -> NoteResponse:
        self._check_id(note_id)
        note = await self.notes.get_owned(note_id, user_id)
        if note is None:
            raise NotFound(NOTE_NOT_FOUND)
        return NoteResponse.model_validate(note)

    async def update(self, note_id: int, user_id: int, **fields: Any) -> NoteResponse:
        """Apply the supplied fields only."""
        try:
            changes = NoteUpdate(**fields).changes()
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, NoteUpdate) from None

        if not changes:
            return await self.get(note_id, user_id)

        self._check_id(note_id)
        note = await self.notes.update_where(note_id, user_id, changes)
        if note is None:
            raise NotFound(NOTE_NOT_FOUND)
        return NoteResponse.model_validate(note)

    async def delete(self, note_id: int, user_id: int) -> None:
        self._check_id(note_id)
        if not await self.notes.delete_where(note_id, user_id):
            raise NotFound(NOTE_NOT_FOUND)
        logger.info(f"Deleted note {note_id} for user {user_id}")

    async def mark_completed(self, note_id: int, user_id: int) -> NoteResponse:
        return await self.update(
            note_id,
            user_id,
            status=NoteStatus.DONE,
            completed_date=self.today(),
        )
