"""Shared logging configuration for CaseMatch."""

import logging
import json
from datetime import datetime

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for better parsing."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                log_data[key] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def setup_logging(name: str, level=None) -> logging.Logger:
    """Set up structured logging.

    Safe to call repeatedly for the same name; the JSON handler is only
    attached once.
    """
    from ..config import settings

    logger = logging.getLogger(name)
    logger.setLevel(level or settings.LOG_LEVEL)

    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    return logger
