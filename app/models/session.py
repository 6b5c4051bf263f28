"""
Server-side login session.

A session binds the SHA-256 digest of an opaque client-held token to a user
id. Sessions expire a fixed time after creation and are removed on logout,
on lookup after expiry, or when their user is deleted.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, IntegerIDMixin, TimestampMixin


class Session(Base, IntegerIDMixin, TimestampMixin):
    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_token_hash", "token_hash", unique=True),
        Index("ix_sessions_expires_at", "expires_at"),
    )

    token_hash = Column(
        String(64),
        nullable=False,
        comment="SHA-256 hex digest of the session token",
    )

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Authenticated user",
    )

    expires_at = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="Absolute expiry (creation time plus the configured TTL)",
    )

    user = relationship("User", back_populates="sessions")

    def __repr__(self):
        return f"<Session(id={self.id}, user_id={self.user_id})>"
