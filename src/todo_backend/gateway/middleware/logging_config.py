"""structlog 配置模块

每条日志带 service=todo-backend；json 模式输出单行 JSON（含结构化异常），
dev 模式输出彩色可读格式。
访问日志由 LoggingMiddleware 负责，uvicorn.access 关闭以免重复；
aiosqlite 的逐语句 debug 日志压到 WARNING。
"""

import logging
import os

import structlog
from todo_backend.core.config import SERVICE_NAME

# 第三方 logger 的固定级别
_QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.CRITICAL,
    "aiosqlite": logging.WARNING,
}


def _add_service_name(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 配置

    Args:
        log_format: "json" 或 "dev"；缺省读取 TODO_LOG_FORMAT（默认 dev）
        log_level: 根 logger 级别；缺省读取 TODO_LOG_LEVEL（默认 INFO）
    """
    log_format = log_format or os.environ.get("TODO_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("TODO_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service_name,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if log_format == "json":
        renderer_chain: list[structlog.types.Processor] = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        renderer_chain = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderer_chain,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
