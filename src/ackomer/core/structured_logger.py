"""
Structured logging setup: JSON log lines for easy parsing and querying.
"""

import json
import logging
import sys
from datetime import datetime
from typing import Optional

from .config import LoggingSettings

LOGGER_NAME = "ackomer"
TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def __init__(self, service: str = "acko-mer-ai") -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Extra fields passed as logger.info(..., extra={"extra_data": {...}})
        if hasattr(record, "extra_data"):
            log_obj.update(record.extra_data)

        return json.dumps(log_obj, default=str)


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Attach handlers to the application logger according to settings.

    Safe to call more than once: existing handlers are replaced.
    """
    settings = settings or LoggingSettings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter: logging.Formatter
    if settings.format == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.file_path:
        file_handler = logging.FileHandler(settings.file_path)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
