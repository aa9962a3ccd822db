"""异常 -> 信封响应映射

ValidationError / 请求解析失败 -> 400
NotFoundError -> 404
其他未处理异常 -> 500
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from todo_backend.core.exceptions import NotFoundError, ValidationError

from .schemas import envelope

log = structlog.get_logger()


def _describe_request_errors(exc: RequestValidationError) -> str:
    """将 FastAPI 请求校验错误压缩为一行可读信息"""
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        details.append(f"{loc}: {msg}" if loc else msg)
    return "Validation failed: " + "; ".join(details)


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    await log.awarning("validation_failed", field=exc.field, error=exc.message)
    return envelope(exc.message, success=False, status_code=400)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _describe_request_errors(exc)
    await log.awarning("request_validation_failed", error=message)
    return envelope(message, success=False, status_code=400)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    await log.awarning("resource_not_found", resource=exc.resource, resource_id=exc.resource_id)
    return envelope(exc.message, success=False, status_code=404)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    await log.aexception("unhandled_error")
    return envelope("An unexpected error occurred", success=False, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(Exception, handle_unexpected_error)
