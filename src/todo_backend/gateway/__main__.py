"""Gateway 启动入口 -- python -m todo_backend.gateway"""

import uvicorn

from .config import load_gateway_config


def main() -> None:
    config = load_gateway_config()
    uvicorn.run(
        "todo_backend.gateway.main:app",
        host=config.host,
        port=config.port,
        log_config=None,  # 沿用 structlog 配置的根 logger
    )


if __name__ == "__main__":
    main()
