import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from typing import AsyncGenerator

import pytest
import pytest_asyncio
import httpx
from httpx import AsyncClient

from filevault.main import app
from filevault.routers.files import get_store
from filevault.store import FileStore

TEST_MAX_UPLOAD_SIZE_BYTES = 1024

@pytest.fixture(scope="function")
def store() -> FileStore:
    return FileStore(max_size_bytes=TEST_MAX_UPLOAD_SIZE_BYTES)

@pytest_asyncio.fixture(scope="function")
async def async_client(store: FileStore) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: store

    transport = httpx.ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testfilevault") as client:
        yield client

    app.dependency_overrides.clear()
