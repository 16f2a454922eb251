from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.blob_store import S3BlobStore
from app.core.stores import StoreContext


def get_store_context(request: Request) -> StoreContext:
    return request.app.state.stores


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with get_store_context(request).session_maker() as session:
        yield session


def get_blob_store(request: Request) -> S3BlobStore:
    return get_store_context(request).blob_store
