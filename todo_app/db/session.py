"""
Database engine and session handle.

The application factory builds one ``Database`` per process and the
lifespan hook connects and disposes it. Stores receive the handle
explicitly instead of reaching for a module-level engine.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from todo_app.errors import StorageError

logger = logging.getLogger(__name__)


class Database:
    """Lazily connected async engine plus its session factory."""

    def __init__(self, url: str, echo: bool = False, connect_timeout: float = 10.0):
        self.url = url
        self.connect_timeout = connect_timeout
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # records stay readable after the session closes
        )
        self.state = "disconnected"
        self.last_error: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self.state == "connected"

    async def connect(self) -> None:
        """Open a connection and run a trivial query within the timeout."""
        async with self._lock:
            if self.is_connected:
                return
            self.state = "connecting"
            try:
                await asyncio.wait_for(self._probe(), timeout=self.connect_timeout)
            except asyncio.TimeoutError as exc:
                self._mark_failed(f"connection timed out after {self.connect_timeout:g}s")
                raise StorageError("Database connection timed out") from exc
            except (SQLAlchemyError, OSError) as exc:
                self._mark_failed(str(exc))
                raise StorageError("Database connection failed") from exc
            self.state = "connected"
            self.last_error = None
            logger.info("Connected to database %s", self.engine.url.render_as_string(hide_password=True))

    async def ensure_connected(self) -> None:
        if not self.is_connected:
            await self.connect()

    async def ping(self) -> bool:
        try:
            await asyncio.wait_for(self._probe(), timeout=self.connect_timeout)
        except (asyncio.TimeoutError, SQLAlchemyError, OSError) as exc:
            self._mark_failed(str(exc) or exc.__class__.__name__)
            return False
        self.state = "connected"
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
        self.state = "disconnected"

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scoped to one store operation; commits on success."""
        await self.ensure_connected()
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def _probe(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    def _mark_failed(self, reason: str) -> None:
        self.state = "error"
        self.last_error = reason
        logger.warning("Database unavailable: %s", reason)
