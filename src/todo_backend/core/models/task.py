"""Task Domain Model

Task 是唯一实体：id 由存储层分配，completed 只允许 false -> true。
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class Task(BaseModel):
    """Task 数据模型

    created_at 创建后不可变；updated_at 在每次变更时刷新，
    且始终不早于 created_at。
    """

    id: int = Field(description="唯一标识，由存储层自增分配，删除后不复用")
    title: str = Field(min_length=1, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    completed: bool = Field(default=False, description="是否已完成")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Task":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        return self
