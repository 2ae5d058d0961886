"""Database Session Managers: one async pool per store, automatic rollback, health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py), tagged
      with the store they came from
    - Callers commit explicitly; leaving the block without commit discards the work

Design Decisions:
    - Two managers (relational, documents) bundled in StoreHandles and stored on
      app.state by the lifespan: no module-level pools, services get handles injected
    - expire_on_commit=False: prevents lazy-load issues in async context
    - from_engine() lets tests bind a manager to an in-memory engine
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from wardrobe_api.core.errors import StorageError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
        store: str = "relational",
    ):
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._bind(engine, store)

    @classmethod
    def from_engine(
        cls, engine: AsyncEngine, store: str = "relational",
    ) -> "DatabaseSessionManager":
        manager = cls.__new__(cls)
        manager._bind(engine, store)
        return manager

    def _bind(self, engine: AsyncEngine, store: str) -> None:
        self.engine = engine
        self.store = store
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error ({self.store}): {e}")
            raise StorageError(
                "Integrity constraint violated", "commit", self.store,
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error ({self.store}): {e}")
            raise StorageError(
                "Connection or operational error", "execute", self.store,
            ) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error ({self.store}): {e}")
            raise StorageError(
                "Database driver error", "query", self.store,
            ) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error ({self.store}): {e}")
            raise StorageError(
                "Database operation failed", "unknown", self.store,
            ) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed ({self.store}): {e}")
            return False

    async def create_all(self, metadata) -> None:
        """Create any missing tables of the given metadata on this store."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


@dataclass
class StoreHandles:
    """The two independent stores a request may touch."""
    relational: DatabaseSessionManager
    documents: DatabaseSessionManager

    async def dispose(self) -> None:
        await self.relational.dispose()
        await self.documents.dispose()


def init_stores(settings) -> StoreHandles:
    """Build both managers from settings (called by the app lifespan)."""
    return StoreHandles(
        relational=DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            store="relational",
        ),
        documents=DatabaseSessionManager(
            settings.document_database_url,
            pool_size=settings.document_database_pool_size,
            max_overflow=settings.document_database_max_overflow,
            store="documents",
        ),
    )


def get_stores(request: Request) -> StoreHandles:
    """FastAPI dependency for the store handles created at startup."""
    stores = getattr(request.app.state, "stores", None)
    if stores is None:
        raise RuntimeError("Stores not initialized")
    return stores
