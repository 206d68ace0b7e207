"""Core classes and mixins for DB connections"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional, cast
from typing import Callable, AsyncContextManager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from components.core import config

settings = config.get_settings()
Base = declarative_base()
SessionMaker = Callable[[], AsyncContextManager[AsyncSession]]

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(
        self,
        url: Optional[str] = None,
        engine: Optional[AsyncEngine] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize DatabaseManager with optional URL or engine for testing."""
        self.url = url or settings.async_db_url
        self.timeout = timeout if timeout is not None else settings.DB_OPERATION_TIMEOUT
        self.engine = engine or self._create_engine()
        self._session_factory = self.get_session()

    def _create_engine(self) -> AsyncEngine:
        """Create async engine for the configured database."""
        options = {
            "echo": False,  # Set to True for SQL query logging
            "pool_pre_ping": True,  # Enable connection health checks
        }
        if not self.url.startswith("sqlite"):
            options["pool_size"] = 5  # Connection pool size
            options["max_overflow"] = 10  # Connections allowed beyond pool_size
        return create_async_engine(self.url, **options)

    def get_session(self) -> SessionMaker:
        """Returns SessionMaker for database sessions."""
        if not self.engine:
            raise ValueError("Database engine wasn't initialized")

        return cast(
            SessionMaker,
            sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            ),
        )

    @asynccontextmanager
    async def get_db(self) -> AsyncContextManager[AsyncSession]:
        """Get database session context manager."""
        async with self._session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_tables(self) -> None:
        """Create every table registered on the declarative base."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check whether the database answers a trivial query within the timeout."""
        try:
            await asyncio.wait_for(self._ping(), self.timeout)
        except Exception as exc:
            logger.warning("database ping failed: %s", exc)
            return False
        return True

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()
