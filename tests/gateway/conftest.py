"""gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from todo_backend.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def store_group(tmp_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """已初始化的 StoreGroup（临时数据库）"""
    group = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def test_app(
    tmp_path: Path,
    store_group: StoreGroup,
    monkeypatch: pytest.MonkeyPatch,
):
    """创建测试用 FastAPI app 实例（手动注入 StoreGroup，绕过 lifespan）"""
    monkeypatch.setenv("TODO_DB_PATH", str(tmp_path / "sqlite" / "test.db"))
    monkeypatch.setenv("TODO_LOG_FORMAT", "json")

    from todo_backend.gateway.main import create_app

    app = create_app()
    app.state.store_group = store_group
    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
