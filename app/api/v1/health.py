import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="Health Check")
async def health_check(db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        database = "unavailable"
    return {"status": "ok", "database": database}
