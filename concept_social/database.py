"""
Async SQLAlchemy engine + session factory.

Production runs against TiDB (MySQL wire protocol, aiomysql driver); any
other SQLAlchemy async URL works as well (tests use aiosqlite).
The engine is created once at startup and reused across all requests.
One session is one unit of work: concept actions only flush, the caller
commits once the whole action (or composition of actions) succeeded.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from sqlalchemy import DateTime, String
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from concept_social.config import settings

logger = logging.getLogger(__name__)


def _uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class BaseDoc(Base):
    """Shape shared by every stored document: id + creation/update stamps."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def to_dict(self) -> dict:
        return {c.key: getattr(self, c.key) for c in self.__mapper__.column_attrs}


class DB:
    """Database state holder (avoids global scoping issues)."""

    engine: Optional[AsyncEngine] = None
    SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


async def init_db(url: Optional[str] = None) -> AsyncEngine:
    """Create the engine and all tables if they don't exist (idempotent)."""
    # Register the ORM models on Base.metadata
    import concept_social.models  # noqa: F401

    url = url or settings.effective_database_url
    engine_kwargs = {"echo": settings.database_echo}
    if url.startswith("mysql"):
        engine_kwargs.update(pool_pre_ping=True, pool_size=20, max_overflow=10)
    DB.engine = create_async_engine(url, **engine_kwargs)
    DB.SessionLocal = async_sessionmaker(
        bind=DB.engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with DB.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised (%s)", DB.engine.url.get_backend_name())
    return DB.engine


async def close_db() -> None:
    if DB.engine is not None:
        await DB.engine.dispose()
    DB.engine = None
    DB.SessionLocal = None


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Yield a session; commit on success, roll back on any error."""
    if DB.SessionLocal is None:
        raise RuntimeError("Database not initialised; call init_db() at startup")
    async with DB.SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
