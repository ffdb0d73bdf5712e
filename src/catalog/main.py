"""HTTP server entry point."""

import sys

import uvicorn
from loguru import logger

from src.catalog.api.http.app import create_app
from src.catalog.api.http.bootstrap import DatabaseUnavailableError
from src.catalog.runtime.config.config_data import load_config


def main() -> None:
    config = load_config()

    try:
        app = create_app(config)
    except DatabaseUnavailableError as e:
        logger.critical("Startup failed: {}", e)
        sys.exit(1)

    logger.info(
        "Server starting",
        addr=f"http://localhost:{config.server.port}",
        environment=config.app.environment,
        log_level=config.logging.level,
    )
    # uvicorn handles SIGINT/SIGTERM: stop accepting, drain, then force-close
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        timeout_keep_alive=config.server.keep_alive_seconds,
        timeout_graceful_shutdown=config.server.graceful_shutdown_seconds,
        access_log=False,  # request logging middleware covers this
        log_config=None,
    )
    logger.info("Server shutdown complete")


if __name__ == "__main__":
    main()
