import argparse
import asyncio

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")

if not settings.app_database_url.startswith(
    ("sqlite+aiosqlite://", "postgresql+asyncpg://")
):
    raise ValueError(
        f"Unsupported settings.app_database_url prefix: {settings.app_database_url}"
    )

logger.debug(f"Application DB URL: {settings.app_database_url}")

if settings.is_sqlite:
    # aiosqlite connections are bound to the event loop that opened them, so
    # they are never pooled.
    app_engine = create_async_engine(
        settings.app_database_url,
        poolclass=NullPool,
        echo=settings.database_echo,
    )

    @event.listens_for(app_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE is ignored by SQLite unless enabled per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    app_engine = create_async_engine(
        settings.app_database_url,
        pool_pre_ping=True,
        pool_size=20,
        max_overflow=30,
        pool_timeout=60,
        pool_recycle=300,
        echo=settings.database_echo,
        connect_args={"timeout": 30},
    )

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db():
    """Create all tables that do not exist yet."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def reset_db():
    """Drop and recreate every table. Destroys all data."""
    logger.warning("Resetting the application database. THIS IS A DESTRUCTIVE OPERATION.")
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_db()
    logger.info("Application database has been reset and re-initialized.")


async def check_db_connection() -> bool:
    """Return True when a trivial query succeeds against the application DB."""
    try:
        async with app_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connectivity check failed: {e}")
        return False


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Application Database Initialization Utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "check"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate every table, "
        "'check' to verify connectivity.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all data in the Application DB. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Application Database reset cancelled by user.")
    elif args.action == "check":
        ok = asyncio.run(check_db_connection())
        logger.info(f"Database reachable: {ok}")
    logger.info("Application Database utility script finished.")
