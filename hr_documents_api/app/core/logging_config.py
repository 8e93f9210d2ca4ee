"""
Logging configuration for the HR Documents API.

``setup_logging`` installs a console handler (and optionally a file
handler) on the root logger once per process.  Records emitted by this
package use the level from settings; the chatty ``uvicorn.access``
logger is raised to WARNING unless debug mode is on, because every
request is already reported by the error handlers when it fails.

``log_request_failure`` is the single place where failed requests are
written to the log, so 4xx and 5xx responses share one format.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import Request

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "hr_documents_api"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure the root and package loggers.

    Parameters
    ----------
    level : str
        Level name for the package logger (``"DEBUG"``, ``"INFO"``...).
        Unknown names fall back to INFO.
    logfile : Optional[str]
        Extra file destination, resolved against the working directory.
    debug : bool
        Keep ``uvicorn.access`` at INFO when true.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)
    if not debug:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if root.handlers:
        # Handlers already installed (pytest, repeated create_app calls).
        return

    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def log_request_failure(
    logger: logging.Logger,
    request: Request,
    status_code: int,
    code: str,
    message: str,
    exc_info: bool = False,
) -> None:
    """Log a failed request: WARNING for client errors, ERROR for server errors."""
    log_level = logging.ERROR if status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        status_code,
        code,
        message,
        exc_info=exc_info,
    )
