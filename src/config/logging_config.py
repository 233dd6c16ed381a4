# src/config/logging_config.py

"""Per-run logging for vendor_feed and the uvicorn server it runs under.

Every launch writes one file, ``logs/run_YYYYMMDD_HHMMSS.log``. Both the
``vendor_feed.*`` namespace and the ``uvicorn`` namespace (startup,
``uvicorn.error`` and ``uvicorn.access``) share its handler, so a request
line and the cache or vendor records it caused sit next to each other.

uvicorn must be started with ``log_config=None`` or its own dictConfig
replaces these handlers.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(lineno)d | "
    "%(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "vendor_feed"
SERVER_LOGGER_NAME = "uvicorn"


def _attach(
    logger: logging.Logger,
    handlers: list[logging.Handler],
    level: int,
) -> None:
    logger.setLevel(level)
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)


def setup_logging() -> Path:
    """Route app and server logs into a fresh run file.

    The app namespace logs at DEBUG to the file and WARNING to stderr.
    The server namespace logs at INFO to both, so the listening address
    and access lines stay visible on the console.

    Returns:
        Path of the log file for this run. Repeat calls keep the first
        run's handlers.
    """
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if app_logger.handlers:
        for handler in app_logger.handlers:
            if isinstance(handler, logging.FileHandler):
                return Path(handler.baseFilename)

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))

    app_console = logging.StreamHandler(sys.stderr)
    app_console.setLevel(logging.WARNING)
    app_console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, _DATE_FORMAT))

    server_console = logging.StreamHandler(sys.stderr)
    server_console.setLevel(logging.INFO)
    server_console.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, _DATE_FORMAT)
    )

    _attach(app_logger, [file_handler, app_console], logging.DEBUG)
    _attach(
        logging.getLogger(SERVER_LOGGER_NAME),
        [file_handler, server_console],
        logging.INFO,
    )

    app_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
