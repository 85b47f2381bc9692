"""
Fixtures compartidas.

Cada test usa su propia base SQLite (aiosqlite) en un directorio temporal;
la dependencia `get_db` de la app se reemplaza por la del manager de test.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ["ENV_MODE"] = "test"

import httpx
import pytest
from sqlalchemy import event

from workhub_common.database import DatabaseManager
from app import database
from app.main import app


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'workhub_test.db'}")
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
async def db(db_manager):
    async with db_manager.session_factory() as session:
        yield session


@pytest.fixture
async def client(db_manager):
    app.dependency_overrides[database.get_db] = db_manager.get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def statements(db_manager):
    """SQL ejecutado contra el engine de test, en orden."""
    captured = []

    def _capture(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    sync_engine = db_manager.engine.sync_engine
    event.listen(sync_engine, "before_cursor_execute", _capture)
    yield captured
    event.remove(sync_engine, "before_cursor_execute", _capture)


