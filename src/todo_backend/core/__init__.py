"""todo_backend Core -- 领域模型、配置与 SQLite 持久化"""
