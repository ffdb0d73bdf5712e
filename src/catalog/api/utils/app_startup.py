import inspect
import logging
import sys
from typing import TYPE_CHECKING

from loguru import logger

from src.catalog.runtime.config.config_data import ConfigData

if TYPE_CHECKING:
    from loguru import Logger

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)

# Third-party loggers and the level they are capped at
STDLIB_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (uvicorn, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Access lines are produced by the request logging middleware
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(
            component=record.name
        ).log(level, record.getMessage())


def _with_defaults(record) -> None:
    extra = record["extra"]
    extra.setdefault("request_id", "-")
    extra.setdefault("component", record["name"])


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers = []
        existing.propagate = True
    for name, level in STDLIB_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: ConfigData) -> "Logger":
    """Configure loguru sinks and return the application logger.

    The returned logger is handed to the composition root, which passes it
    to every component that logs. Development gets colourised plain lines;
    every other environment gets one JSON document per record.
    """
    settings = config.logging
    environment = config.app.environment
    as_json = settings.format == "json"

    logger.remove()
    logger.configure(extra={"request_id": "-"}, patcher=_with_defaults)

    logger.add(
        sys.stderr,
        level=settings.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        colorize=not as_json,
        backtrace=environment != "production",
        diagnose=environment == "development",
    )
    _route_stdlib_logging()

    log = logger.bind(component="catalog")
    log.info(
        "Logging configured",
        level=settings.level,
        format=settings.format,
        environment=environment,
    )
    return log
