"""TaskStore SQLite 实现

所有写操作在 _write_lock 内执行单条语句并立即提交；失败时回滚并向上抛出。
共享连接上同一时刻只有一个未提交的写事务，回滚不会波及其他请求。
缺失记录（含超出 SQLite INTEGER 范围的 id）以 None / False 表示，
由服务层转换为 NotFoundError。
"""

import asyncio
from collections.abc import Iterable
from datetime import UTC, datetime

import aiosqlite

from ..config import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN
from ..models.task import Task

_COLUMNS = "id, title, description, completed, created_at, updated_at"


def _format_ts(ts: datetime) -> str:
    """统一为 UTC + 微秒精度，保证字典序与时间序一致"""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat(timespec="microseconds")


def _storable_id(task_id: int) -> bool:
    """id 能否绑定为 SQLite INTEGER；超出范围的 id 必然不存在"""
    return SQLITE_INTEGER_MIN <= task_id <= SQLITE_INTEGER_MAX


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn
        self._write_lock = asyncio.Lock()

    async def _write(self, sql: str, params: Iterable) -> aiosqlite.Cursor:
        """串行执行单条写语句并提交"""
        async with self._write_lock:
            try:
                cursor = await self._conn.execute(sql, params)
                await self._conn.commit()
            except Exception:
                await self._conn.rollback()
                raise
        return cursor

    async def create_task(
        self,
        title: str,
        description: str | None,
        created_at: datetime,
    ) -> Task:
        """创建任务记录，id 由数据库分配，created_at = updated_at"""
        ts = _format_ts(created_at)
        cursor = await self._write(
            """
            INSERT INTO tasks (title, description, completed, created_at, updated_at)
            VALUES (?, ?, 0, ?, ?)
            """,
            (title, description, ts, ts),
        )
        return Task(
            id=cursor.lastrowid,
            title=title,
            description=description,
            completed=False,
            created_at=datetime.fromisoformat(ts),
            updated_at=datetime.fromisoformat(ts),
        )

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        if not _storable_id(task_id):
            return None
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_recent_incomplete(self, limit: int) -> list[Task]:
        """查询最近创建的未完成任务，按 created_at 倒序，id 倒序兜底"""
        if limit <= 0:
            return []
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM tasks
            WHERE completed = 0
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            (min(limit, SQLITE_INTEGER_MAX),),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def list_all_tasks(self) -> list[Task]:
        """查询全部任务，按 created_at 倒序"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks ORDER BY created_at DESC, id DESC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def count_incomplete(self) -> int:
        """统计未完成任务数"""
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM tasks WHERE completed = 0"
        )
        row = await cursor.fetchone()
        return row[0] if row is not None else 0

    async def mark_completed(self, task_id: int, updated_at: datetime) -> Task | None:
        """将任务标记为已完成并刷新 updated_at

        已完成的任务再次调用时仅刷新 updated_at。
        """
        if not _storable_id(task_id):
            return None
        cursor = await self._write(
            "UPDATE tasks SET completed = 1, updated_at = ? WHERE id = ?",
            (_format_ts(updated_at), task_id),
        )
        if cursor.rowcount == 0:
            return None
        return await self.get_task(task_id)

    async def delete_task(self, task_id: int) -> bool:
        """永久删除任务，返回是否有记录被删除"""
        if not _storable_id(task_id):
            return False
        cursor = await self._write(
            "DELETE FROM tasks WHERE id = ?",
            (task_id,),
        )
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            completed=bool(row[3]),
            created_at=datetime.fromisoformat(row[4]),
            updated_at=datetime.fromisoformat(row[5]),
        )
