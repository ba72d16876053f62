from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from preinscription.platform.config import Settings
from preinscription.platform.exceptions import DatabaseNotConfiguredError


class Database:
    """
    Process-wide handle on the store: one async engine (and its pool) plus
    the session factory bound to it.

    Built once by the application lifespan and reached by handlers through
    ``get_db``. A handle without a URL can be built; it only fails when used.
    """

    def __init__(self, engine: Optional[AsyncEngine]):
        self._engine = engine
        self._sessionmaker = (
            async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
            if engine is not None
            else None
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = settings.async_database_url
        if url is None:
            return cls(None)

        kwargs = {
            "echo": False,
            "pool_pre_ping": True,
        }
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"timeout": settings.DB_POOL_TIMEOUT}
        else:
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=1800,
            )
            if settings.database_ssl and url.startswith("postgresql+asyncpg"):
                # Encrypted without certificate verification
                kwargs["connect_args"] = {"ssl": "require"}

        return cls(create_async_engine(url, **kwargs))

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotConfiguredError("DATABASE_URL is not set")
        return self._engine

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise DatabaseNotConfiguredError("DATABASE_URL is not set")
        return self._sessionmaker()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
