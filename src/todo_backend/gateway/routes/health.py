"""健康检查路由

GET /api/health: Liveness 检查，永远返回 200。
GET /api/ready: Readiness 检查，验证 SQLite 连通性。
"""

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse
from todo_backend.core.config import SERVICE_NAME

log = structlog.get_logger()

router = APIRouter(prefix="/api")


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "UP", "service": SERVICE_NAME}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. sqlite: 数据库连通性
    2. incomplete_tasks: 当前未完成任务数（仅 sqlite 可用时）
    """
    checks: dict = {}
    all_ok = True

    try:
        store_group = request.app.state.store_group
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
        checks["incomplete_tasks"] = await store_group.task_store.count_incomplete()
    except Exception as e:
        log.warning("readiness_sqlite_failed", error=str(e))
        checks["sqlite"] = "unavailable"
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "service": SERVICE_NAME,
            "checks": checks,
        },
    )
