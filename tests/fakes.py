"""
In-memory stand-ins for the user directory, note directory and session store.

They implement the same method names as the SQLAlchemy handlers so the
services can be exercised without a database.
"""

from __future__ import annotations

import itertools
import secrets
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from typing import Any

from sqlalchemy.exc import IntegrityError, OperationalError


class FakeUserDirectory:
    def __init__(self) -> None:
        self.users: dict[int, SimpleNamespace] = {}
        self._ids = itertools.count(1)
        self.race_on_create = False

    async def get(self, id: int) -> SimpleNamespace | None:
        return self.users.get(id)

    async def get_by_email(self, email: str) -> SimpleNamespace | None:
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, obj_dict: dict[str, Any]) -> SimpleNamespace:
        if self.race_on_create:
            raise IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint"))
        user = SimpleNamespace(id=next(self._ids), **obj_dict)
        self.users[user.id] = user
        return user


class FakeNoteDirectory:
    def __init__(self) -> None:
        self.notes: dict[int, SimpleNamespace] = {}
        self._ids = itertools.count(1)

    async def list_by_owner(self, owner_id: int) -> list[SimpleNamespace]:
        return [n for n in self.notes.values() if n.user_id == owner_id]

    async def create(self, obj_dict: dict[str, Any]) -> SimpleNamespace:
        note = SimpleNamespace(id=next(self._ids), **obj_dict)
        self.notes[note.id] = note
        return note

    async def get_owned(self, note_id: int, owner_id: int) -> SimpleNamespace | None:
        note = self.notes.get(note_id)
        if note is None or note.user_id != owner_id:
            return None
        return note

    async def update_where(
        self, note_id: int, owner_id: int, fields: dict[str, Any]
    ) -> SimpleNamespace | None:
        note = await self.get_owned(note_id, owner_id)
        if note is None:
            return None
        for key, value in fields.items():
            setattr(note, key, value)
        return note

    async def delete_where(self, note_id: int, owner_id: int) -> bool:
        if await self.get_owned(note_id, owner_id) is None:
            return False
        del self.notes[note_id]
        return True


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeSessionStore:
    def __init__(self, ttl: timedelta = timedelta(minutes=30), clock: FakeClock | None = None):
        self.ttl = ttl
        self.clock = clock or FakeClock()
        self.sessions: dict[str, tuple[int, datetime]] = {}
        self.fail_on_destroy = False

    async def create_session(self, user_id: int) -> str:
        token = secrets.token_urlsafe(16)
        self.sessions[token] = (user_id, self.clock() + self.ttl)
        return token

    async def resolve(self, token: str) -> int | None:
        entry = self.sessions.get(token)
        if entry is None:
            return None
        user_id, expires_at = entry
        if expires_at <= self.clock():
            del self.sessions[token]
            return None
        return user_id

    async def destroy(self, token: str) -> bool:
        if self.fail_on_destroy:
            raise OperationalError("DELETE FROM sessions", {}, Exception("disk I/O error"))
        return self.sessions.pop(token, None) is not None
