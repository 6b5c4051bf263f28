from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models.session import Session
from app.utils.auth import as_utc, generate_session_token, hash_session_token, utcnow
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.session")


class SessionDBHandler(BaseDBHandler[Session]):
    """
    Server-side session store keyed by token digest.

    Sessions live for a fixed TTL from creation. Expired rows are deleted
    when they are looked up and by ``purge_expired``.
    """

    def __init__(
        self,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        super().__init__(Session)
        self.ttl = ttl or timedelta(minutes=settings.session_ttl_minutes)
        self.clock = clock

    @check_local_db
    async def create_session(self, user_id: int, *, db: AsyncSession = None) -> str:
        """Persist a new session and return the raw token for the client."""
        token = generate_session_token()
        await self.create(
            {
                "token_hash": hash_session_token(token),
                "user_id": user_id,
                "expires_at": self.clock() + self.ttl,
            },
            db=db,
        )
        return token

    @check_local_db
    async def resolve(self, token: str, *, db: AsyncSession = None) -> int | None:
        """Return the user id bound to an unexpired session, else None."""
        stmt = select(Session).where(Session.token_hash == hash_session_token(token))
        result = await db.execute(stmt)
        session = result.scalar_one_or_none()
        if session is None:
            return None

        if as_utc(session.expires_at) <= self.clock():
            logger.debug(f"Session {session.id} expired, removing it")
            await db.delete(session)
            await db.commit()
            return None

        return session.user_id

    @check_local_db
    async def destroy(self, token: str, *, db: AsyncSession = None) -> bool:
        """Delete the session for ``token``; unknown tokens are not an error."""
        try:
            stmt = delete(Session).where(
                Session.token_hash == hash_session_token(token)
            )
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error destroying session: {e}", exc_info=True)
            raise

    @check_local_db
    async def purge_expired(self, *, db: AsyncSession = None) -> int:
        """Delete every expired session; returns the number removed."""
        stmt = delete(Session).where(Session.expires_at <= self.clock())
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount
