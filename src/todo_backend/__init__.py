"""todo-backend: 任务追踪 CRUD 服务"""

__version__ = "0.1.0"
