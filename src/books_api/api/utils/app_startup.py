"""Logging setup: loguru sinks plus a bridge for stdlib ``logging`` records."""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.books_api.runtime.config.config_data import ConfigData, LoggingConfig
from src.books_api.runtime.context import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# SQL echo and pool chatter stay out of the request log
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (uvicorn, SQLAlchemy) to loguru.

    ``uvicorn.access`` lines are dropped: ``log_requests`` already writes one
    line per request with its request id.
    """

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, verbose: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(path),
        level=cfg.level,
        format=LOG_FORMAT,
        serialize=cfg.format == "json",
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        enqueue=True,
        backtrace=verbose,
        diagnose=verbose,
    )


def configure_logging(config: ConfigData | None = None) -> None:
    """Install the stderr sink, the optional file sink and the stdlib bridge.

    Uses the active configuration when ``config`` is not given. Safe to call
    again; existing sinks and handlers are replaced.
    """
    config = config or get_config()
    cfg = config.logging
    # diagnose prints local variable values into tracebacks
    verbose = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=LOG_FORMAT,
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )
    if cfg.file:
        _add_file_sink(cfg, verbose)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True
    for name, level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    logger.info(
        "Logging configured",
        level=cfg.level,
        format=cfg.format,
        file=cfg.file,
    )
