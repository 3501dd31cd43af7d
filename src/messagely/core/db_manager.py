from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator
import logging

from messagely.config import Config
from .database import Base


class BaseDatabaseManager:
    """
    Storage handle shared by the gateways.
    Every session() block is one transaction: committed on success, rolled back on error.
    """
    def __init__(self, config: Config, logger: logging.Logger | None = None):
        self.config = config
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self._logger = logger or logging.getLogger(__name__)

    async def initialize(self):
        raise NotImplementedError()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if not self.engine:
            await self.initialize()

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_tables(self):
        if not self.engine:
            await self.initialize()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._logger.info("Database tables created")

    async def drop_tables(self):
        if not self.engine:
            await self.initialize()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        self._logger.warning("Database tables dropped")

    async def close(self):
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None


class DatabaseManager(BaseDatabaseManager):
    """ PostgreSQL via asyncpg """

    async def initialize(self):
        self.engine = create_async_engine(
            url=self.config.db.url,
            pool_size=30,
            max_overflow=20,
            pool_pre_ping=True,
            pool_timeout=60,
            pool_recycle=-1,
            echo=self.config.db.echo,
        )

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )


class SQLiteDatabaseManager(BaseDatabaseManager):
    """ SQLite via aiosqlite, with foreign keys enforced on every connection """

    async def initialize(self):
        Path(self.config.db.path).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_async_engine(
            url=self.config.db.url,
            echo=self.config.db.echo,
        )

        @event.listens_for(self.engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )


def create_db_manager(config: Config, logger: logging.Logger | None = None) -> BaseDatabaseManager:
    if config.db.is_postgres:
        return DatabaseManager(config, logger)
    return SQLiteDatabaseManager(config, logger)
