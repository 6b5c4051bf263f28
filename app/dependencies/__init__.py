from app.dependencies.auth import (
    get_auth_service,
    get_current_user_id,
    get_note_service,
    get_session_db_handler,
    get_session_token,
)

__all__ = [
    "get_auth_service",
    "get_current_user_id",
    "get_note_service",
    "get_session_db_handler",
    "get_session_token",
]
