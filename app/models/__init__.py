"""
Database models for the notes application.

Architecture: User → Note, User → Session.
"""

from app.models.note import NOTE_STATUSES, Note, NoteStatus
from app.models.session import Session
from app.models.user import User

__all__ = [
    "User",
    "Note",
    "NoteStatus",
    "NOTE_STATUSES",
    "Session",
]
