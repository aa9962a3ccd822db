"""GatewayConfig -- Gateway 配置加载

从环境变量加载 HTTP 监听地址与 CORS 配置。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

_DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:80",
    "http://localhost:5173",
]


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        TODO_HOST: 监听地址（默认 0.0.0.0）
        TODO_PORT: 监听端口（默认 8080）
        TODO_CORS_ORIGINS: 逗号分隔的 CORS 允许来源
    """

    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=8080, ge=1, le=65535, description="监听端口")
    cors_origins: list[str] = Field(
        default_factory=lambda: list(_DEFAULT_CORS_ORIGINS),
        description="CORS 允许来源",
    )


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TODO_HOST"):
        kwargs["host"] = val

    if val := os.environ.get("TODO_PORT"):
        try:
            port = int(val)
        except ValueError:
            port = None
        if port is not None and 1 <= port <= 65535:
            kwargs["port"] = port
        else:
            log.warning(
                "invalid_port_config",
                env_var="TODO_PORT",
                value=val,
                fallback=8080,
            )
            # 使用默认值，不阻塞启动

    if val := os.environ.get("TODO_CORS_ORIGINS"):
        kwargs["cors_origins"] = [o.strip() for o in val.split(",") if o.strip()]

    return GatewayConfig(**kwargs)
