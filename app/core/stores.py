"""
Store clients shared by every request.

Built once when the application starts and released on shutdown; routes get
them through the dependencies in app.core.deps.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.blob_store import S3BlobStore
from app.core.config import Settings
from app.core.database import create_engine_from_settings, create_session_maker
from app.core.startup import ensure_blob_container, ensure_tables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreContext:
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    blob_store: S3BlobStore


@asynccontextmanager
async def open_store_context(settings: Settings) -> AsyncIterator[StoreContext]:
    engine = create_engine_from_settings(settings)
    blob_store = S3BlobStore(settings)
    try:
        if settings.AUTO_CREATE_TABLES:
            await ensure_tables(engine)
        if blob_store.enabled:
            await ensure_blob_container(blob_store)
        yield StoreContext(
            engine=engine,
            session_maker=create_session_maker(engine),
            blob_store=blob_store,
        )
    finally:
        await engine.dispose()
        logger.info("Store connections closed")
