"""
Structured logging configuration for ReleaseHub.

Provides JSON-formatted logging with file rotation for production environments
and human-readable console logging for development.

Loggers:
- services: Binary resolution, uploads, audit and issue operations
- storage: S3 and local directory access
- db: Database engine and session events
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional


LOGGER_NAMES = ["services", "storage", "db"]


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs log records as single-line JSON.

    Each record includes timestamp, level, logger, message, module,
    function and line, plus exception text and any ``extra`` fields.
    """

    # Attributes present on every LogRecord; anything else came from extra={...}
    _RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._RESERVED and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for console output in development.

    Format: [TIMESTAMP] LEVEL - LOGGER - MESSAGE
    Example: [2025-12-29 10:30:45] INFO - releasehub.services - Uploaded binary app-1.2.0.deb
    """

    def __init__(self):
        super().__init__(
            fmt="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def _get_log_level() -> int:
    """
    Get log level from RELEASEHUB_LOG_LEVEL (default INFO).
    """
    level_str = os.environ.get("RELEASEHUB_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_str, logging.INFO)


def _get_log_dir() -> Path:
    """
    Get log directory from RELEASEHUB_LOG_DIR (default ./logs), creating it.
    """
    log_dir = Path(os.environ.get("RELEASEHUB_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _is_production() -> bool:
    """Check RELEASEHUB_ENV for a production deployment."""
    return os.environ.get("RELEASEHUB_ENV", "development").lower() == "production"


def configure_logging() -> Dict[str, logging.Logger]:
    """
    Configure the ReleaseHub loggers.

    Behavior:
    - Production (RELEASEHUB_ENV=production):
      * JSON-formatted logs to files with rotation
      * One file per logger: services.log, storage.log, db.log
      * File rotation: 10MB max size, 5 backup files

    - Development (default):
      * Human-readable console output on stderr

    Returns:
        Dictionary mapping short logger names to configured Logger instances
    """
    log_level = _get_log_level()
    is_prod = _is_production()
    log_dir = _get_log_dir() if is_prod else None

    loggers = {}
    for logger_name in LOGGER_NAMES:
        logger = logging.getLogger(f"releasehub.{logger_name}")
        logger.setLevel(log_level)
        logger.propagate = False
        logger.handlers.clear()

        if is_prod:
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / f"{logger_name}.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(ConsoleFormatter())
            logger.addHandler(console_handler)

        loggers[logger_name] = logger

    return loggers


_loggers: Optional[Dict[str, logging.Logger]] = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger by short name.

    Args:
        name: Logger name (services, storage, db)

    Raises:
        ValueError: If logger name is not recognized

    Example:
        >>> logger = get_logger("services")
        >>> logger.info("Uploaded binary", extra={"filename": "app-1.2.0.deb"})
    """
    global _loggers

    if _loggers is None:
        _loggers = configure_logging()

    if name not in _loggers:
        raise ValueError(
            f"Unknown logger name: {name}. "
            f"Valid names: {', '.join(_loggers.keys())}"
        )

    return _loggers[name]


def init_logging() -> Dict[str, logging.Logger]:
    """Re-read the environment and reconfigure all loggers."""
    global _loggers
    _loggers = configure_logging()
    return _loggers
