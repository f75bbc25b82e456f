"""Structured logging configuration for LogDimmer.

JSON-formatted records by default, human-readable text when
LOGDIMMER_LOG_FORMAT=text.
"""

import json
import logging
import sys
from datetime import datetime
from datetime import timezone
from typing import Any

from logdimmer.config import get_config

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord has; anything else came from ``extra=``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "extra_fields", "taskName"}


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    """Create the formatter for a configured log format.

    Args:
        log_format: "json" or "text"

    Returns:
        Formatter instance
    """
    if log_format.lower() == "json":
        return JsonFormatter()
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def configure_logging() -> None:
    """Configure the root logger from the application configuration.

    Replaces existing root handlers with a single stdout handler.
    """
    config = get_config()
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(build_formatter(config.log_format))
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "log_level": config.log_level,
            "log_format": config.log_format,
        },
    )

