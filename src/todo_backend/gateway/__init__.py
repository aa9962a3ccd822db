"""todo_backend Gateway -- FastAPI HTTP 接口层"""
