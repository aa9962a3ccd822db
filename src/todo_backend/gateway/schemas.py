"""HTTP 请求/响应模型

所有接口（健康检查除外）统一返回 {success, message, data} 信封；
任务字段在线上使用 camelCase。
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from starlette.responses import JSONResponse
from todo_backend.core.models import Task

T = TypeVar("T")


class TaskCreateRequest(BaseModel):
    """任务创建请求体

    标题的必填/长度校验在 TaskService 中完成，
    以便统一抛出 ValidationError。
    """

    title: str | None = Field(default=None, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")


class TaskResponse(BaseModel):
    """任务响应体"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    description: str | None
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())


def serialize_task(task: Task) -> dict[str, Any]:
    """Task -> camelCase JSON dict"""
    return TaskResponse.from_task(task).model_dump(mode="json", by_alias=True)


class ApiResponse(BaseModel, Generic[T]):
    """标准响应信封"""

    success: bool
    message: str
    data: T | None = None


def envelope(
    message: str,
    data: Any = None,
    *,
    success: bool = True,
    status_code: int = 200,
) -> JSONResponse:
    """构造信封格式的 JSONResponse"""
    body = ApiResponse[Any](success=success, message=message, data=data)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )
