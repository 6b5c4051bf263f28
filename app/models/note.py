"""
Note model for dated personal tasks.

Each note belongs to exactly one user. Every query that reads or mutates a
note filters on both ``id`` and ``user_id``; the owner is set from the
authenticated session and never from client input.

Status lifecycle:
    todo ⇄ done (caller-driven, either direction)
"""

import enum

from sqlalchemy import Column, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship, validates

from app.models.base import Base, IntegerIDMixin, TimestampMixin


class NoteStatus(str, enum.Enum):
    TODO = "todo"
    DONE = "done"


NOTE_STATUSES = [s.value for s in NoteStatus]


class Note(Base, IntegerIDMixin, TimestampMixin):
    """
    A dated task owned by a single user.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index("ix_notes_user_id", "user_id"),
        Index("ix_notes_status", "status"),
    )

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owner of the note",
    )

    title = Column(
        Text,
        nullable=False,
        comment="Task description shown in the list",
    )

    created_date = Column(
        Date,
        nullable=False,
        comment="Calendar date the task was created",
    )

    completed_date = Column(
        Date,
        nullable=False,
        comment="Calendar date the task is due or was completed",
    )

    status = Column(
        String(10),
        nullable=False,
        default=NoteStatus.TODO.value,
        comment="Current status: todo/done",
    )

    owner = relationship(
        "User",
        back_populates="notes",
        doc="User who owns this note",
    )

    @validates("status")
    def validate_status(self, key, value):
        if isinstance(value, NoteStatus):
            value = value.value
        if value not in NOTE_STATUSES:
            raise ValueError(f"Invalid note status: {value}")
        return value

    @validates("title")
    def validate_title(self, key, value):
        if value is None or not value.strip():
            raise ValueError("Note title must not be empty")
        return value

    def __repr__(self):
        return (
            f"<Note(id={self.id}, user_id={self.user_id}, "
            f"status='{self.status}', title='{self.title[:50]}')>"
        )
