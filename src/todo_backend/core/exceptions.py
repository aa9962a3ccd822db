"""Todo 异常体系

ValidationError -> HTTP 400，NotFoundError -> HTTP 404，
均在 gateway 边界渲染为标准响应信封。
"""


class TodoError(Exception):
    """todo_backend 基础异常"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TodoError):
    """输入缺失或不合法（如标题为空）"""

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Args:
            message: 错误描述
            field: 出错的字段名（可选）
        """
        super().__init__(message)
        self.field = field


class NotFoundError(TodoError):
    """引用的资源不存在"""

    def __init__(self, resource: str, resource_id: object) -> None:
        """
        Args:
            resource: 资源名称，如 "Task"
            resource_id: 未找到的资源 ID
        """
        super().__init__(f"{resource} not found with id: {resource_id}")
        self.resource = resource
        self.resource_id = resource_id
