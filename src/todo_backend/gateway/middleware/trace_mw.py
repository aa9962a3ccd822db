"""TaskContextMiddleware

为针对单个任务的请求绑定 task_id，贯穿该请求内的所有日志。
task_id 从 /api/tasks/{id} 路径中提取。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def extract_task_id(path: str) -> int | None:
    """从 /api/tasks/{id}[/...] 中提取整数 task_id，不匹配时返回 None"""
    parts = [p for p in path.split("/") if p]
    for i, part in enumerate(parts):
        if part == "tasks" and i + 1 < len(parts):
            candidate = parts[i + 1]
            if candidate.isdigit():
                return int(candidate)
            return None
    return None


class TaskContextMiddleware(BaseHTTPMiddleware):
    """任务级上下文中间件 -- 为任务操作绑定 task_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id is not None:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
