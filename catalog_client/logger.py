"""
Structured logging setup.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Union


LOGGER_NAME = "catalog_client"


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields from record
        if isinstance(getattr(record, "extra", None), dict):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str)


def _sync_console_handler(logger: logging.Logger) -> None:
    """Keep the stdout handler only while the host has not configured root logging."""
    ours = [h for h in logger.handlers if getattr(h, "_catalog_console", False)]
    if logging.getLogger().handlers:
        # Records propagate to the host's handlers; a second stdout line would duplicate them
        for handler in ours:
            logger.removeHandler(handler)
    elif not ours:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(StructuredFormatter())
        console_handler._catalog_console = True
        logger.addHandler(console_handler)


def setup_logger(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure structured logging for the catalog client."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    _sync_console_handler(logger)

    return logger


def configure_logging(level: Union[int, str]) -> None:
    """Apply the policy log level to the client logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    _sync_console_handler(logger)


# Global logger instance
logger = setup_logger()
