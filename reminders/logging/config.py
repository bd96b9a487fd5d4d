"""Structlog setup shared by the web process, the worker and the commands.

Each process writes JSON lines to its own rotating file and colored single
lines to the console. The file name follows the execution context so the
worker's timer activity is not interleaved with request logs.
"""

import logging
import logging.handlers
import os
import time
from pathlib import Path

import structlog

from reminders.logging.context import (
    FOREGROUND,
    get_execution_context,
    set_execution_context,
)
from reminders.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

LOG_DIR = "./logs"
MAX_LOG_BYTES = 50 * 1024 * 1024
LOG_BACKUP_COUNT = 20
LOG_RETENTION_DAYS = 10


def log_file_for(execution_context: str) -> str:
    """Default log file of a process, e.g. ``./logs/reminders-worker.log``."""
    return str(Path(LOG_DIR) / f"reminders-{execution_context}.log")


def _pre_chain(with_metadata: bool) -> list:
    chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
    ]
    if with_metadata:
        chain += [add_service_context, add_process_info]
    return chain


def setup_logging(execution_context: str | None = None) -> str:
    """Configure structlog and the stdlib root logger.

    Args:
        execution_context: Label for this process. Defaults to the current
            label, ``foreground`` unless something already changed it.

    Environment Variables:
    - LOG_FILE_PATH: Overrides the per-context log file
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME, ENVIRONMENT: metadata added to file logs

    Returns:
        Path of the JSON log file in use.
    """
    if execution_context:
        set_execution_context(execution_context)
    context = get_execution_context() or FOREGROUND

    log_file_path = os.getenv("LOG_FILE_PATH") or log_file_for(context)
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)
    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            *_pre_chain(with_metadata=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_pre_chain(with_metadata=True),
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_pre_chain(with_metadata=False),
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in (file_handler, console_handler):
        handler.setLevel(level)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path,
        log_level=log_level,
    )
    return log_file_path


def cleanup_old_logs(
    log_file_path: str, retention_days: int = LOG_RETENTION_DAYS
) -> int:
    """Delete rotations of ``log_file_path`` untouched for ``retention_days``.

    The live file itself is never removed.

    Returns:
        Number of files deleted.
    """
    path = Path(log_file_path)
    cutoff = time.time() - retention_days * 24 * 60 * 60
    logger = structlog.get_logger(__name__)

    deleted = 0
    for rotated in path.parent.glob(f"{path.name}.*"):
        if rotated.stat().st_mtime > cutoff:
            continue
        try:
            rotated.unlink()
            deleted += 1
        except OSError as e:
            logger.warning("log_file_delete_failed", file=str(rotated), error=str(e))

    if deleted:
        logger.info(
            "old_log_files_cleaned",
            deleted_count=deleted,
            retention_days=retention_days,
        )
    return deleted
