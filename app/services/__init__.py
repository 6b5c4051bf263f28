from app.services.auth_service import AuthService
from app.services.note_service import NoteService

__all__ = ["AuthService", "NoteService"]
