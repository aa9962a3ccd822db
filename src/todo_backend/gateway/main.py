"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 中间件 + 异常处理 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from todo_backend.core.config import SERVICE_NAME, get_db_path
from todo_backend.core.store import create_store_group

from .config import load_gateway_config
from .errors import register_exception_handlers
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TaskContextMiddleware
from .routes import health, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时打开数据库连接，关闭时清理"""
    db_path = get_db_path()
    app.state.store_group = await create_store_group(db_path)
    log.info("store_initialized", db_path=db_path)

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()
        log.info("store_closed")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    config = load_gateway_config()

    app = FastAPI(
        title="Todo Backend",
        version="0.1.0",
        description=f"{SERVICE_NAME} task tracking API",
        lifespan=lifespan,
    )
    app.state.gateway_config = config

    # 注册中间件（顺序：先 TaskContext 后 Logging，Logging 在最外层）
    app.add_middleware(TaskContextMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # 初始化日志
    setup_logging()

    register_exception_handlers(app)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
