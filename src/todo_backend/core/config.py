"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、最近任务条数、标题长度上限等可配置常量。
"""

import os
from pathlib import Path

# 服务名（健康检查返回）
SERVICE_NAME: str = "todo-backend"

# 最近未完成任务列表的固定页大小
MAX_RECENT_TASKS: int = 5

# 任务标题最大长度
TITLE_MAX_LENGTH: int = 255

# SQLite INTEGER 取值范围（任务 id 的合法区间）
SQLITE_INTEGER_MIN: int = -(2**63)
SQLITE_INTEGER_MAX: int = 2**63 - 1


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TODO_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TODO_DB_PATH",
        str(_get_base_dir() / "sqlite" / "todo.db"),
    )
