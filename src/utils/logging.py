"""Structured JSON logging configuration."""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any

# Extra fields that must never reach the log stream verbatim
REDACTED_KEYS = {'password', 'password_hash', 'token', 'authorization', 'jwt_secret_key'}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    # Standard LogRecord attributes that should not be included as extra fields
    _STANDARD_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname',
        'process', 'processName', 'relativeCreated', 'thread', 'threadName',
        'exc_info', 'exc_text', 'stack_info', 'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # logger.info("msg", extra={"userId": "123"}) puts userId directly on the record
        for key, value in record.__dict__.items():
            if key in self._STANDARD_ATTRS or callable(value):
                continue
            log_data[key] = "[REDACTED]" if key.lower() in REDACTED_KEYS else value

        return json.dumps(log_data, default=str)


def setup_structured_logging(level: str = "INFO"):
    """Configure structured JSON logging for the application, uvicorn loggers included."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error"):
        logging.getLogger(name).handlers = [handler]
        logging.getLogger(name).propagate = False

    # Access logs only for warnings and errors
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers = [handler]
    uvicorn_access.setLevel(logging.WARNING)
