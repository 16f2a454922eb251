from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from app.core.config import Settings


Base = declarative_base()


def get_database_url(settings: Settings) -> str:
    db_url = settings.DATABASE_URL
    if "postgresql" in db_url and "sslmode" not in db_url and settings.ENVIRONMENT != "development":
        return f"{db_url}?sslmode=require"
    return db_url


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    return create_async_engine(get_database_url(settings), echo=settings.SQL_ECHO)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
