"""Async database manager for ViralGif-Engine."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from viralgif_engine.common.config import ViralGifSettings, get_settings
from viralgif_engine.common.models import Base

# Import all model modules so Base.metadata is complete for create_all().
import viralgif_engine.accounts.models  # noqa: F401
import viralgif_engine.usage.models  # noqa: F401


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url)


class DatabaseManager:
    """Manages a single async database engine with a bounded pool."""

    def __init__(self, settings: ViralGifSettings | None = None):
        self._settings = settings or get_settings()
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _engine_options(self) -> dict[str, Any]:
        url = self._settings.db_url
        options: dict[str, Any] = {
            "echo": False,
            "connect_args": {"timeout": self._settings.db_connect_timeout},
        }
        # In-memory SQLite runs on a single static connection; no pool sizing.
        if not _is_memory_sqlite(url):
            options.update(
                pool_size=self._settings.db_pool_size,
                max_overflow=self._settings.db_max_overflow,
                pool_timeout=self._settings.db_pool_timeout,
                pool_pre_ping=True,
            )
        return options

    async def init(self) -> None:
        self.engine = create_async_engine(self._settings.db_url, **self._engine_options())
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("DatabaseManager not initialized — call init() first")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized — call init() first")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None
