from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.note import Note
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.note")


class NoteDBHandler(BaseDBHandler[Note]):
    """Owner-scoped access to notes: every lookup matches id and user_id."""

    def __init__(self):
        super().__init__(Note)

    @check_local_db
    async def list_by_owner(
        self, owner_id: int, *, db: AsyncSession = None
    ) -> list[Note]:
        """All notes of one user in insertion order."""
        return await self.get_multi_by_attributes(user_id=owner_id, db=db)

    @check_local_db
    async def get_owned(
        self, note_id: int, owner_id: int, *, db: AsyncSession = None
    ) -> Note | None:
        stmt = select(Note).where(Note.id == note_id, Note.user_id == owner_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @check_local_db
    async def update_where(
        self,
        note_id: int,
        owner_id: int,
        fields: dict[str, Any],
        *,
        db: AsyncSession = None,
    ) -> Note | None:
        """Apply ``fields`` to the note if it belongs to ``owner_id``."""
        note = await self.get_owned(note_id, owner_id, db=db)
        if note is None:
            return None
        # The owner column is never writable through an update
        fields = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
        return await self.update(note, fields, db=db)

    @check_local_db
    async def delete_where(
        self, note_id: int, owner_id: int, *, db: AsyncSession = None
    ) -> bool:
        """Delete the note if it belongs to ``owner_id``; True when a row went."""
        try:
            stmt = delete(Note).where(Note.id == note_id, Note.user_id == owner_id)
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting note {note_id}: {e}", exc_info=True)
            raise
