"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./notes.db"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        # Allow override from environment variables
        env_prefix="",
    )

    # ===== Database Configuration =====
    app_database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        alias="NOTES_DATABASE_URL",
        description="Application database URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )

    database_echo: bool = Field(
        default=False,
        alias="DATABASE_ECHO",
        description="Echo SQL statements to the log",
    )

    # ===== Session & Password Configuration =====
    session_ttl_minutes: int = Field(
        default=1440,
        alias="SESSION_TTL_MINUTES",
        gt=0,
        description="Session lifetime in minutes, fixed from creation (24 hours default)",
    )

    session_cookie_name: str = Field(
        default="notes_session",
        alias="SESSION_COOKIE_NAME",
        description="Name of the cookie carrying the session token",
    )

    session_cookie_secure: bool = Field(
        default=False,
        alias="SESSION_COOKIE_SECURE",
        description="Only send the session cookie over HTTPS",
    )

    bcrypt_rounds: int = Field(
        default=10,
        alias="BCRYPT_ROUNDS",
        ge=4,
        le=31,
        description="bcrypt work factor used when hashing new passwords",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8080, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",  # Vite dev server default port
            "http://localhost:3000",  # Alternative dev port
            "http://127.0.0.1:5173",  # Local IP variant
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Normalize the database URL and log warnings for risky configurations."""

        if self.app_database_url.startswith("postgresql://"):
            self.app_database_url = self.app_database_url.replace(
                "postgresql://", "postgresql+asyncpg://", 1
            )
        elif self.app_database_url.startswith("sqlite://"):
            self.app_database_url = self.app_database_url.replace(
                "sqlite://", "sqlite+aiosqlite://", 1
            )

        if self.app_database_url == DEFAULT_DATABASE_URL:
            logger.warning(
                "NOTES_DATABASE_URL environment variable not set, using local SQLite file."
            )

        if not self.session_cookie_secure:
            logger.debug("Session cookie is not restricted to HTTPS.")

        logger.debug(f"Session TTL: {self.session_ttl_minutes} minutes")

        return self

    @property
    def is_sqlite(self) -> bool:
        return self.app_database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
