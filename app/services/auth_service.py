"""
Session authentication gate.

Establishes and verifies caller identity for every protected operation.
Credential handling stays here; note operations only ever see the user id
returned by ``authenticate``.

Collaborators are injected:
    users     - user directory: ``get(id)``, ``get_by_email(email)``, ``create(dict)``
    sessions  - session store: ``create_session(user_id)``, ``resolve(token)``,
                ``destroy(token)``
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.exceptions import (
    DuplicateEmail,
    InternalError,
    InvalidCredentials,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from app.schemas import UserPublic, UserRegister, normalize_email
from app.utils.auth import get_password_hash, verify_dummy_password, verify_password
from app.utils.logger import setup_logger

logger = setup_logger("auth_service")


class AuthService:
    def __init__(self, users, sessions):
        self.users = users
        self.sessions = sessions

    async def register(
        self, name: str, email: str, password: str
    ) -> tuple[UserPublic, str]:
        """Create an account and log it in; returns the profile and session token."""
        try:
            data = UserRegister(name=name, email=email, password=password)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, UserRegister) from None

        if await self.users.get_by_email(data.email):
            raise DuplicateEmail()

        try:
            user = await self.users.create(
                {
                    "name": data.name,
                    "email": data.email,
                    "hashed_password": get_password_hash(data.password),
                }
            )
        except IntegrityError:
            # Lost a race with a concurrent registration for the same e-mail
            raise DuplicateEmail() from None

        token = await self.sessions.create_session(user.id)
        logger.info(f"Registered user {user.id}")
        return UserPublic.model_validate(user), token

    async def login(self, email: str, password: str) -> tuple[UserPublic, str]:
        """Check credentials and open a session; one error for every failure."""
        user = await self.users.get_by_email(normalize_email(email))

        if user is None:
            verify_dummy_password(password)
            logger.info("Login failed")
            raise InvalidCredentials()

        if not verify_password(password, user.hashed_password):
            logger.info("Login failed")
            raise InvalidCredentials()

        token = await self.sessions.create_session(user.id)
        logger.info(f"User {user.id} logged in")
        return UserPublic.model_validate(user), token

    async def logout(self, token: str | None) -> None:
        """Destroy the session. Absent or unknown sessions are not an error."""
        if not token:
            return
        try:
            await self.sessions.destroy(token)
        except SQLAlchemyError as e:
            raise InternalError() from e

    async def authenticate(self, token: str | None) -> int:
        """Resolve a session token to a user id or raise ``Unauthenticated``."""
        if not token:
            raise Unauthenticated()
        user_id = await self.sessions.resolve(token)
        if user_id is None:
            raise Unauthenticated()
        return user_id

    async def whoami(self, token: str | None) -> UserPublic:
        user_id = await self.authenticate(token)
        user = await self.users.get(user_id)
        if user is None:
            # Orphaned session: reported, not invalidated
            logger.warning(f"Session refers to missing user {user_id}")
            raise NotFound("User not found")
        return UserPublic.model_validate(user)
