import os

# Settings are read when app.core.config is imported; point them at test values first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_rental.db")
os.environ["S3_BUCKET_NAME"] = ""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import create_engine_from_settings, create_session_maker
from app.core.deps import get_blob_store
from app.core.startup import ensure_tables
from app.main import create_app


class FakeBlobStore:
    """In-memory stand-in for S3BlobStore."""

    enabled = True
    base_url = "https://blobs.test"

    def __init__(self):
        self.objects = {}

    async def upload(self, name, data, content_type=None):
        self.objects[name] = (data, content_type)
        return f"{self.base_url}/{name}"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'rental.db'}",
        S3_BUCKET_NAME="",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
async def session_maker(settings):
    engine = create_engine_from_settings(settings)
    await ensure_tables(engine)
    yield create_session_maker(engine)
    await engine.dispose()


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def client(settings, blob_store):
    app = create_app(settings, static_dir=None)
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as test_client:
        yield test_client
