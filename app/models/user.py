"""
User model for authentication and note ownership.

Architecture:
    User → Note
    User → Session

Key Features:
    - bcrypt password hashing, the plaintext is never stored
    - Unique, normalised (lower-case) e-mail used as the login identifier
    - Cascading delete of owned notes and sessions
"""

from sqlalchemy import Column, Index, String
from sqlalchemy.orm import relationship

from app.models.base import Base, IntegerIDMixin, TimestampMixin


class User(Base, IntegerIDMixin, TimestampMixin):
    """
    Registered account that owns notes.

    Users are created on registration and are immutable through the API.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_email", "email", unique=True),)

    name = Column(
        String(100),
        nullable=False,
        comment="Display name",
    )

    email = Column(
        String(254),
        nullable=False,
        comment="Unique lower-cased e-mail used for login",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password for secure authentication",
    )

    notes = relationship(
        "Note",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="Notes owned by this user",
    )

    sessions = relationship(
        "Session",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="Active login sessions for this user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
