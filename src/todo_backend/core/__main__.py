"""CLI 入口模块 -- python -m todo_backend.core <command>

支持的命令：
  stats     输出任务总数与未完成任务数
  list-all  按创建时间倒序列出全部任务
"""

import asyncio
import sys

from .config import get_db_path

_USAGE = """用法: python -m todo_backend.core <command>
命令:
  stats     输出任务总数与未完成任务数
  list-all  按创建时间倒序列出全部任务"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "stats":
        asyncio.run(show_stats())
    elif command == "list-all":
        asyncio.run(list_all())
    else:
        print(f"未知命令: {command}")
        print("可用命令: stats, list-all")
        sys.exit(1)


async def show_stats() -> None:
    """输出任务统计"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        tasks = await store_group.task_store.list_all_tasks()
        incomplete = await store_group.task_store.count_incomplete()
        print(f"任务总数: {len(tasks)}")
        print(f"未完成任务: {incomplete}")
    finally:
        await store_group.conn.close()


async def list_all() -> None:
    """列出全部任务"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        tasks = await store_group.task_store.list_all_tasks()
        for task in tasks:
            mark = "x" if task.completed else " "
            print(f"[{mark}] #{task.id} {task.title} ({task.created_at.isoformat()})")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
