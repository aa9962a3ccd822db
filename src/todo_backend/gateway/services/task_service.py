"""TaskService -- 任务创建/查询/完成/删除业务逻辑

存储层对缺失记录返回 None / False，此处统一转换为 NotFoundError；
创建入口做显式前置校验，失败抛出 ValidationError。
"""

from datetime import UTC, datetime

import structlog
from todo_backend.core.config import MAX_RECENT_TASKS, TITLE_MAX_LENGTH
from todo_backend.core.exceptions import NotFoundError, ValidationError
from todo_backend.core.models import Task
from todo_backend.core.store import StoreGroup, TaskStore

log = structlog.get_logger()


def _ensure_utf8(value: str, field: str) -> None:
    """SQLite 以 UTF-8 存储文本；孤立代理项等无法编码的字符视为非法输入"""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError(
            f"{field.capitalize()} contains characters that cannot be stored",
            field=field,
        ) from e


def validate_title(title: object) -> str:
    """校验任务标题：必填、非空白、可编码、不超过 TITLE_MAX_LENGTH"""
    if title is None or not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required", field="title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must not exceed {TITLE_MAX_LENGTH} characters",
            field="title",
        )
    _ensure_utf8(title, "title")
    return title


def validate_description(description: object) -> str | None:
    """校验任务描述：可选，若提供必须是可编码的字符串"""
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError("Description must be a string", field="description")
    _ensure_utf8(description, "description")
    return description


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._tasks: TaskStore = store_group.task_store

    async def create_task(self, title: object, description: object = None) -> Task:
        """创建任务

        Args:
            title: 任务标题（必填）
            description: 任务描述（可选）

        Returns:
            新建的 Task，completed=False 且 created_at == updated_at

        Raises:
            ValidationError: 标题缺失、为空、过长，或字段含无法存储的字符
        """
        validated_title = validate_title(title)
        validated_description = validate_description(description)

        log.debug("creating_task", title=validated_title)
        task = await self._tasks.create_task(
            validated_title,
            validated_description,
            datetime.now(UTC),
        )
        log.info("task_created", task_id=task.id)
        return task

    async def get_task(self, task_id: int) -> Task:
        """查询单个任务，不存在时抛出 NotFoundError"""
        log.debug("fetching_task", task_id=task_id)
        task = await self._tasks.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def list_recent_incomplete(self, limit: int = MAX_RECENT_TASKS) -> list[Task]:
        """最近创建的未完成任务，最多 limit 条，新的在前"""
        log.debug("fetching_recent_tasks", limit=limit)
        return await self._tasks.list_recent_incomplete(limit)

    async def complete_task(self, task_id: int) -> Task:
        """标记任务为已完成

        已完成的任务允许再次调用，仅刷新 updated_at。
        """
        log.debug("completing_task", task_id=task_id)
        task = await self._tasks.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)

        # updated_at 不早于 created_at（时钟回拨时取 created_at）
        now = max(datetime.now(UTC), task.created_at)
        updated = await self._tasks.mark_completed(task_id, now)
        if updated is None:
            # 查询与更新之间被并发删除
            raise NotFoundError("Task", task_id)

        log.info("task_completed", task_id=task_id)
        return updated

    async def delete_task(self, task_id: int) -> None:
        """永久删除任务，不存在时抛出 NotFoundError"""
        log.debug("deleting_task", task_id=task_id)
        deleted = await self._tasks.delete_task(task_id)
        if not deleted:
            raise NotFoundError("Task", task_id)
        log.info("task_deleted", task_id=task_id)
