"""Store Protocol 接口定义

定义 TaskStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from datetime import datetime
from typing import Protocol

from ..models.task import Task


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(
        self,
        title: str,
        description: str | None,
        created_at: datetime,
    ) -> Task:
        """创建任务记录并返回带 id 的 Task"""
        ...

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def list_recent_incomplete(self, limit: int) -> list[Task]:
        """查询最近的未完成任务"""
        ...

    async def list_all_tasks(self) -> list[Task]:
        """查询全部任务"""
        ...

    async def count_incomplete(self) -> int:
        """统计未完成任务数"""
        ...

    async def mark_completed(self, task_id: int, updated_at: datetime) -> Task | None:
        """标记任务完成"""
        ...

    async def delete_task(self, task_id: int) -> bool:
        """删除任务"""
        ...
