# Authentication API routes for registration, login, logout and profile lookup

from fastapi import APIRouter, Depends, Response, status

from app.config import settings
from app.dependencies.auth import get_auth_service, get_session_token
from app.schemas import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from app.services import AuthService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    user_data: UserRegister,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and log them in."""
    # Password is hashed with bcrypt before storage
    user, token = await auth_service.register(
        name=user_data.name, email=user_data.email, password=user_data.password
    )
    _set_session_cookie(response, token)
    return AuthResponse(user=user, token=token)


@router.post("/login", response_model=AuthResponse)
async def login_user(
    user_data: UserLogin,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Check credentials and open a new session."""
    user, token = await auth_service.login(user_data.email, user_data.password)
    _set_session_cookie(response, token)
    return AuthResponse(user=user, token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout_user(
    response: Response,
    token: str | None = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """End the current session. Calling it without a session is harmless."""
    await auth_service.logout(token)
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    token: str | None = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Retrieve the profile of the logged-in user."""
    return UserResponse(user=await auth_service.whoami(token))
