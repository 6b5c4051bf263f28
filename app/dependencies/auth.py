"""
Authentication dependencies for FastAPI route protection.

The session token is read from an ``Authorization: Bearer`` header when one
is sent and from the session cookie otherwise, so browser and API clients can
both use the same routes.
"""


from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.db_handlers import NoteDBHandler, SessionDBHandler, UserDBHandler
from app.services import AuthService, NoteService

# HTTP Bearer token extraction; missing credentials are handled by AuthService
security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """Raw session token presented by the client, if any."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


def get_session_db_handler() -> SessionDBHandler:
    return SessionDBHandler()


def get_auth_service(
    user_db_handler: UserDBHandler = Depends(),
    session_db_handler: SessionDBHandler = Depends(get_session_db_handler),
) -> AuthService:
    return AuthService(users=user_db_handler, sessions=session_db_handler)


def get_note_service(note_db_handler: NoteDBHandler = Depends()) -> NoteService:
    return NoteService(notes=note_db_handler)


async def get_current_user_id(
    token: str | None = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> int:
    """
    Dependency resolving the caller's user id; raises ``Unauthenticated``
    before the route body runs when the session is missing or expired.
    """
    return await auth_service.authenticate(token)
