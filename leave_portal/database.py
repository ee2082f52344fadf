import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """
    Owns the async engine and the session factory for one process.

    Built explicitly from a URL and handed to whoever needs it; nothing
    connects until init() runs, and dispose() releases the pool.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.url = make_url(database_url)
        if self.url.get_backend_name() == "sqlite":
            # aiosqlite connections are bound to the loop that opened them
            self.engine = create_async_engine(self.url, echo=echo, poolclass=NullPool)
        else:
            self.engine = create_async_engine(self.url, echo=echo, pool_pre_ping=True)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init(self) -> None:
        """Provision the database (PostgreSQL) and the schema if absent."""
        if self.url.get_backend_name() == "postgresql":
            await self._ensure_database()

        # Import models so they are registered with Base.metadata before create_all
        from leave_portal.models import leave_request  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema ready", extra={"tables": sorted(Base.metadata.tables)})

    async def _ensure_database(self) -> None:
        name = self.url.database
        maintenance = create_async_engine(
            self.url.set(database="postgres"),
            isolation_level="AUTOCOMMIT",
            poolclass=NullPool,
        )
        try:
            async with maintenance.connect() as conn:
                exists = await conn.scalar(
                    text("SELECT 1 FROM pg_database WHERE datname = :name"),
                    {"name": name},
                )
                if not exists:
                    # Identifiers cannot be bound as parameters
                    quoted = maintenance.dialect.identifier_preparer.quote(name)
                    await conn.execute(text(f"CREATE DATABASE {quoted}"))
                    logger.info(f"Created database {name}")
        finally:
            await maintenance.dispose()

    async def ping(self) -> None:
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Session Provider: one session (one pooled connection) per request.
    Transaction boundaries are owned by the store; the session is closed
    when the request finishes, whatever the outcome.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
