"""任务路由

GET    /api/tasks                   最近 5 条未完成任务
POST   /api/tasks                   创建任务
GET    /api/tasks/{task_id}         任务详情
PUT    /api/tasks/{task_id}/complete 标记完成
DELETE /api/tasks/{task_id}         删除任务

NotFoundError / ValidationError 由 errors.py 中的异常处理器转换为信封响应。
"""

import structlog
from fastapi import APIRouter, Depends, Path
from todo_backend.core.config import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN

from ..deps import get_task_service
from ..schemas import ApiResponse, TaskCreateRequest, TaskResponse, envelope, serialize_task
from ..services.task_service import TaskService

log = structlog.get_logger()

router = APIRouter(prefix="/api/tasks")

# 超出 64 位整数范围的 id 视为请求格式错误（400）
TASK_ID = Path(ge=SQLITE_INTEGER_MIN, le=SQLITE_INTEGER_MAX, description="任务 id")


@router.get("", response_model=ApiResponse[list[TaskResponse]])
async def list_recent_tasks(service: TaskService = Depends(get_task_service)):
    """查询最近创建的未完成任务，按 created_at 倒序"""
    log.info("list_recent_tasks")
    tasks = await service.list_recent_incomplete()
    return envelope(
        "Tasks retrieved successfully",
        [serialize_task(t) for t in tasks],
    )


@router.post("", status_code=201, response_model=ApiResponse[TaskResponse])
async def create_task(
    body: TaskCreateRequest,
    service: TaskService = Depends(get_task_service),
):
    """创建任务，标题为空返回 400"""
    log.info("create_task")
    task = await service.create_task(body.title, body.description)
    return envelope(
        "Task created successfully",
        serialize_task(task),
        status_code=201,
    )


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
async def get_task(task_id: int = TASK_ID, service: TaskService = Depends(get_task_service)):
    """查询任务详情"""
    log.info("get_task")
    task = await service.get_task(task_id)
    return envelope("Task retrieved successfully", serialize_task(task))


@router.put("/{task_id}/complete", response_model=ApiResponse[TaskResponse])
async def complete_task(
    task_id: int = TASK_ID,
    service: TaskService = Depends(get_task_service),
):
    """标记任务为已完成"""
    log.info("complete_task")
    task = await service.complete_task(task_id)
    return envelope("Task marked as completed", serialize_task(task))


@router.delete("/{task_id}", response_model=ApiResponse[None])
async def delete_task(task_id: int = TASK_ID, service: TaskService = Depends(get_task_service)):
    """永久删除任务"""
    log.info("delete_task")
    await service.delete_task(task_id)
    return envelope("Task deleted successfully")
