"""LoggingMiddleware -- 任务 API 访问日志

每个请求一条 request_completed：operation（路由名，如 complete_task）、task_id、
status_code、outcome、duration_ms。
4xx 记 warning，5xx 与未处理异常记 error，其余记 info。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

from .trace_mw import extract_task_id

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(incoming: str | None) -> str:
    """沿用调用方传入的合法 ULID，否则生成新的"""
    if incoming:
        try:
            return str(ULID.from_str(incoming))
        except ValueError:
            pass
    return str(ULID())


def classify_outcome(status_code: int) -> str:
    """按状态码归类：ok / not_found / rejected / error"""
    if status_code >= 500:
        return "error"
    if status_code == 404:
        return "not_found"
    if status_code >= 400:
        return "rejected"
    return "ok"


def _operation_name(request: Request) -> str | None:
    """路由匹配后由 router 写入 scope；未匹配（如 404 路径）时为 None"""
    route = request.scope.get("route")
    if route is not None:
        return getattr(route, "name", None)
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", None)


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件 -- request_id + 耗时 + 结果分类"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_failed",
                operation=_operation_name(request),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        status_code = response.status_code
        outcome = classify_outcome(status_code)
        fields = {
            "operation": _operation_name(request),
            "status_code": status_code,
            "outcome": outcome,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        }
        # 内层中间件绑定的 contextvars 不会回传到这里
        task_id = extract_task_id(request.url.path)
        if task_id is not None:
            fields["task_id"] = task_id
        if outcome == "error":
            await log.aerror("request_completed", **fields)
        elif outcome in ("not_found", "rejected"):
            await log.awarning("request_completed", **fields)
        else:
            await log.ainfo("request_completed", **fields)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
