"""Logging setup.

Development logs are single human-readable lines, production logs are one
JSON object per line so they can be shipped to a log collector as-is.
"""

import json
import logging
import sys
from datetime import UTC, datetime

from ledger.config import Settings

ROOT_LOGGER_NAME = "ledger"

DEV_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


def configure_logging(settings: Settings) -> logging.Logger:
    """Configure and return the root application logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())
    logger.propagate = False

    # Reconfiguring (e.g. one app per test) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if settings.log_disabled:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.StreamHandler(sys.stdout)
    if settings.is_production:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT))
    logger.addHandler(handler)

    logger.info(f"Logger initialized with minimum log level {settings.log_level.upper()}")
    return logger
