#!/usr/bin/env python3

"""
Main application entry point for the personal notes service.

Architecture: FastAPI application with session authentication and owner-scoped notes.
Key Features: Lifecycle management, database health checks, error handling, CORS configuration.
"""

import errno
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.auth import router as auth_router
from app.api.notes import router as notes_router
from app.config import settings
from app.db import check_db_connection, close_db, init_db
from app.db_handlers import SessionDBHandler
from app.exceptions import (
    AppError,
    InternalError,
    Unauthenticated,
    ValidationError,
    field_errors,
)
from app.schemas import HealthResponse
from app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")
    try:
        logger.info("Initializing database...")
        await init_db()
        logger.info("Database initialization complete.")

        logger.info("Checking database connectivity...")
        if await check_db_connection():
            logger.info("Database connectivity confirmed.")
        else:
            logger.critical("Database connectivity check failed.")
            raise SystemExit("Database connection failed.")

        purged = await SessionDBHandler().purge_expired()
        if purged:
            logger.info(f"Removed {purged} expired sessions.")

    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Notes API startup successful.")

    yield

    logger.info("Notes API shutdown...")
    await close_db()
    logger.info("Shutdown complete.")


def _error_response(exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=headers
    )


def create_app():
    app = FastAPI(title="Notes API", lifespan=lifespan)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.url.path}: {exc.__cause__!r}"
            )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        return _error_response(ValidationError(field_errors(exc.errors())))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=exc)
        return _error_response(InternalError())

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(f"OSError caught: {exc}, errno: {exc.errno}")
        if exc.errno in [errno.ETIMEDOUT, errno.ECONNREFUSED]:
            logger.error(
                f"Returning 503 due to DB connection issue: {settings.db_unavailable_hint}"
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": settings.db_unavailable_hint},
            )
        return _error_response(InternalError())

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        """API health check endpoint."""
        database_ok = await check_db_connection()
        return HealthResponse(
            status="ok" if database_ok else "degraded", database=database_ok
        )

    app.include_router(auth_router)
    app.include_router(notes_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    return app


app = create_app()


def main():
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting notes API server on {host}:{port}")

    try:
        uvicorn.run(app, host=host, port=port, workers=settings.server_workers)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
