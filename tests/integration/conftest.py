"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from todo_backend.core.store import create_store_group


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """集成测试用 FastAPI app"""
    db_path = str(tmp_path / "sqlite" / "integration.db")
    monkeypatch.setenv("TODO_DB_PATH", db_path)

    from todo_backend.gateway.main import create_app

    app = create_app()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group

    yield app

    await store_group.conn.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
