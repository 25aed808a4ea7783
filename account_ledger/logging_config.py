"""
Structured Logging Configuration Module

JSON or plain-text output for the ``ledger`` logger tree. Ledger and
authentication events carry structured fields (customer, action, resource
and free-form extra data) which the JSON formatter emits as top-level keys.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Record attributes set through log_action
STRUCTURED_FIELDS = ("customer_id", "action", "resource", "extra")


class JSONFormatter(logging.Formatter):
    """One JSON object per line; absent structured fields are omitted"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json",
                  logger_name: str = "ledger") -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "json" for structured output, anything else for plain text
        logger_name: Name of the root application logger

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = "ledger") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               customer_id: Optional[int] = None, action: Optional[str] = None,
               resource: Optional[str] = None, extra: Optional[dict] = None) -> None:
    """
    Log a ledger or authentication event with structured fields.

    Args:
        logger: Logger instance
        level: Level name (info, warning, error, ...)
        message: Human-readable message
        customer_id: Customer the event applies to
        action: Machine-readable event name, e.g. ``deposit`` or ``login_failed``
        resource: Resource acted upon, e.g. ``customer:7``
        extra: Additional structured data
    """
    fields = dict(zip(STRUCTURED_FIELDS, (customer_id, action, resource, extra or None)))
    logger.log(
        getattr(logging, level.upper()), message,
        extra={name: value for name, value in fields.items() if value is not None},
        stacklevel=2,
    )
