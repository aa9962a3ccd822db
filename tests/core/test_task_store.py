"""SqliteTaskStore 单元测试

测试内容：
1. 创建/查询/完成/删除
2. 最近未完成任务的排序与条数上限
3. 删除后 id 不复用
"""

import asyncio
import sqlite3
from datetime import UTC, datetime, timedelta

import aiosqlite
import pytest_asyncio
from todo_backend.core.store.sqlite_init import verify_wal_mode
from todo_backend.core.store.task_store import SqliteTaskStore

BASE_TS = datetime(2026, 1, 1, 9, 0, 0, tzinfo=UTC)


@pytest_asyncio.fixture
async def store(db_conn: aiosqlite.Connection) -> SqliteTaskStore:
    return SqliteTaskStore(db_conn)


class TestCreateAndGet:
    async def test_create_assigns_id_and_defaults(self, store: SqliteTaskStore):
        """新建任务分配 id，completed=False，created_at == updated_at"""
        task = await store.create_task("Write report", "Q1 numbers", BASE_TS)

        assert task.id >= 1
        assert task.title == "Write report"
        assert task.description == "Q1 numbers"
        assert task.completed is False
        assert task.created_at == task.updated_at == BASE_TS

    async def test_get_roundtrip(self, store: SqliteTaskStore):
        created = await store.create_task("Buy milk", None, BASE_TS)

        fetched = await store.get_task(created.id)

        assert fetched == created
        assert fetched.description is None

    async def test_get_missing_returns_none(self, store: SqliteTaskStore):
        assert await store.get_task(999) is None

    async def test_naive_timestamp_treated_as_utc(self, store: SqliteTaskStore):
        task = await store.create_task("Naive", None, datetime(2026, 1, 1, 9, 0, 0))
        assert task.created_at == BASE_TS


class TestListRecentIncomplete:
    async def test_returns_five_newest_of_seven(self, store: SqliteTaskStore):
        """7 条未完成任务只返回最近 5 条，新的在前"""
        for i in range(1, 8):
            await store.create_task(f"Task {i}", None, BASE_TS + timedelta(minutes=i))

        tasks = await store.list_recent_incomplete(5)

        assert [t.title for t in tasks] == ["Task 7", "Task 6", "Task 5", "Task 4", "Task 3"]

    async def test_excludes_completed(self, store: SqliteTaskStore):
        done = await store.create_task("Done", None, BASE_TS)
        await store.create_task("Open", None, BASE_TS + timedelta(seconds=1))
        await store.mark_completed(done.id, BASE_TS + timedelta(seconds=2))

        tasks = await store.list_recent_incomplete(5)

        assert [t.title for t in tasks] == ["Open"]
        assert all(not t.completed for t in tasks)

    async def test_ties_broken_by_id_descending(self, store: SqliteTaskStore):
        """created_at 相同时按 id 倒序"""
        first = await store.create_task("First", None, BASE_TS)
        second = await store.create_task("Second", None, BASE_TS)

        tasks = await store.list_recent_incomplete(5)

        assert [t.id for t in tasks] == [second.id, first.id]

    async def test_microsecond_ordering(self, store: SqliteTaskStore):
        """整秒与带微秒的时间戳按时间先后排序"""
        await store.create_task("Whole second", None, BASE_TS)
        await store.create_task("Later", None, BASE_TS + timedelta(microseconds=1))

        tasks = await store.list_recent_incomplete(5)

        assert [t.title for t in tasks] == ["Later", "Whole second"]

    async def test_non_positive_limit_returns_empty(self, store: SqliteTaskStore):
        await store.create_task("Any", None, BASE_TS)
        assert await store.list_recent_incomplete(0) == []
        assert await store.list_recent_incomplete(-1) == []

    async def test_empty_store(self, store: SqliteTaskStore):
        assert await store.list_recent_incomplete(5) == []


class TestMarkCompleted:
    async def test_sets_completed_and_refreshes_updated_at(self, store: SqliteTaskStore):
        task = await store.create_task("Finish me", None, BASE_TS)
        later = BASE_TS + timedelta(hours=1)

        updated = await store.mark_completed(task.id, later)

        assert updated is not None
        assert updated.completed is True
        assert updated.created_at == BASE_TS
        assert updated.updated_at == later

    async def test_recomplete_only_refreshes_updated_at(self, store: SqliteTaskStore):
        task = await store.create_task("Twice", None, BASE_TS)
        await store.mark_completed(task.id, BASE_TS + timedelta(hours=1))

        again = await store.mark_completed(task.id, BASE_TS + timedelta(hours=2))

        assert again.completed is True
        assert again.updated_at == BASE_TS + timedelta(hours=2)

    async def test_missing_returns_none(self, store: SqliteTaskStore):
        assert await store.mark_completed(42, BASE_TS) is None


class TestDelete:
    async def test_delete_removes_record(self, store: SqliteTaskStore):
        task = await store.create_task("Temp", None, BASE_TS)

        assert await store.delete_task(task.id) is True
        assert await store.get_task(task.id) is None

    async def test_delete_missing_returns_false(self, store: SqliteTaskStore):
        assert await store.delete_task(123) is False

    async def test_ids_not_reused_after_delete(self, store: SqliteTaskStore):
        """AUTOINCREMENT：删除最大 id 后新任务不复用该 id"""
        first = await store.create_task("One", None, BASE_TS)
        await store.delete_task(first.id)

        second = await store.create_task("Two", None, BASE_TS)

        assert second.id > first.id


class TestCountsAndListing:
    async def test_count_incomplete(self, store: SqliteTaskStore):
        a = await store.create_task("A", None, BASE_TS)
        await store.create_task("B", None, BASE_TS)
        await store.mark_completed(a.id, BASE_TS)

        assert await store.count_incomplete() == 1

    async def test_list_all_includes_completed(self, store: SqliteTaskStore):
        a = await store.create_task("A", None, BASE_TS)
        await store.create_task("B", None, BASE_TS + timedelta(seconds=1))
        await store.mark_completed(a.id, BASE_TS + timedelta(seconds=2))

        tasks = await store.list_all_tasks()

        assert [t.title for t in tasks] == ["B", "A"]
        assert tasks[1].completed is True


class TestOutOfRangeIds:
    """超出 SQLite INTEGER 范围的 id 视为不存在"""

    async def test_get_returns_none(self, store: SqliteTaskStore):
        assert await store.get_task(2**63) is None
        assert await store.get_task(-(2**63) - 1) is None

    async def test_mark_completed_returns_none(self, store: SqliteTaskStore):
        assert await store.mark_completed(10**20, BASE_TS) is None

    async def test_delete_returns_false(self, store: SqliteTaskStore):
        assert await store.delete_task(10**20) is False

    async def test_huge_limit_is_clamped(self, store: SqliteTaskStore):
        await store.create_task("Only", None, BASE_TS)
        assert len(await store.list_recent_incomplete(10**20)) == 1


class TestConcurrentWrites:
    async def test_failed_insert_does_not_discard_other_writes(
        self, store: SqliteTaskStore, db_conn: aiosqlite.Connection
    ):
        """并发写入中某条失败回滚，不影响其他已报告成功的写入"""
        titles = ["" if i % 3 == 0 else f"Task {i}" for i in range(12)]

        results = await asyncio.gather(
            *(store.create_task(t, None, BASE_TS) for t in titles),
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, BaseException)]
        failed = [r for r in results if isinstance(r, sqlite3.IntegrityError)]
        assert len(failed) == 4
        assert len(succeeded) == 8
        for task in succeeded:
            assert await store.get_task(task.id) == task
        cursor = await db_conn.execute("SELECT COUNT(*) FROM tasks")
        assert (await cursor.fetchone())[0] == 8


class TestSchema:
    async def test_wal_mode_enabled(self, db_conn: aiosqlite.Connection):
        assert await verify_wal_mode(db_conn) is True
