"""
Authentication utilities: bcrypt password hashing and opaque session tokens.

Uses industry-standard security practices:
- bcrypt with a per-password salt and configurable work factor
- constant-time hash comparison via bcrypt.checkpw
- URL-safe random session tokens, persisted only as SHA-256 digests
- UTC timezone consistency
"""

import hashlib
import secrets
from datetime import UTC, datetime

import bcrypt

from app.config import settings

SESSION_TOKEN_BYTES = 32

# Verified against when the e-mail is unknown so both login failure paths cost
# one bcrypt comparison.
_DUMMY_PASSWORD_HASH = bcrypt.hashpw(
    b"not-a-real-password", bcrypt.gensalt(rounds=settings.bcrypt_rounds)
).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Malformed stored hash or oversized password
        return False


def verify_dummy_password(plain_password: str) -> bool:
    """Spend the same work as a real verification; always fails."""
    verify_password(plain_password, _DUMMY_PASSWORD_HASH)
    return False


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def generate_session_token() -> str:
    """Create a new opaque session token for the client."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def hash_session_token(token: str) -> str:
    """Digest under which a session token is stored server-side."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes read back from SQLite as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
