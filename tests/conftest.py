import asyncio
import os
import tempfile

import pytest

# settings are read at import time, so point them at throwaway locations first
_TMP = tempfile.mkdtemp(prefix="interpretlab-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP, 'app.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["STATUS_MACHINE"] = "permissive"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from interpretlab.api.deps import get_file_storage, get_session_factory  # noqa: E402
from interpretlab.core.database import build_engine, build_session_factory, get_db, init_db  # noqa: E402
from interpretlab.main import app  # noqa: E402
from interpretlab.services.catalog_service import CatalogService  # noqa: E402
from interpretlab.services.collaborators import LocalFileStorage  # noqa: E402


@pytest.fixture
def session_factory(tmp_path):
    """Fresh SQLite database per test"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    asyncio.run(init_db(engine))
    return build_session_factory(engine)


@pytest.fixture
def run_scenario(session_factory):
    """
    Run ``scenario(service)`` on its own event loop with a CatalogService
    bound to the per-test database and return its result.
    """
    def run(scenario, status_machine=None):
        async def main():
            async with session_factory() as db:
                return await scenario(CatalogService(db, status_machine))
        return asyncio.run(main())
    return run


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(session_factory, upload_dir):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_file_storage] = lambda: LocalFileStorage(str(upload_dir))
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
