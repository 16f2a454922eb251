"""
Startup provisioning: tables and the image bucket.
"""
import asyncio
import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.blob_store import S3BlobStore
from app.core.database import Base
from app.core.exceptions import StoreFailure

# Register the models on Base.metadata
from app.models.client import Client  # noqa
from app.models.rental import Rental  # noqa
from app.models.vehicle import Vehicle  # noqa

logger = logging.getLogger(__name__)


async def ensure_tables(engine: AsyncEngine) -> None:
    """Create each collection table that does not exist yet. Errors are logged, not raised."""
    for table in Base.metadata.sorted_tables:
        try:
            async with engine.begin() as conn:
                exists = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(table.name))
                if exists:
                    logger.info("Table already exists: %s", table.name)
                    continue
                await conn.run_sync(table.create)
                logger.info("Table created: %s", table.name)
        except SQLAlchemyError as e:
            logger.error("Error creating table %s: %s", table.name, e)


async def ensure_blob_container(blob_store: S3BlobStore) -> None:
    """Make sure the image bucket exists. Errors are logged so the app can still start."""
    try:
        await asyncio.to_thread(blob_store.ensure_bucket)
    except StoreFailure as e:
        logger.error("Error creating bucket %s: %s", blob_store.bucket, e.message)
