"""
Application settings and the shared logger.

All values come from environment variables so the same code runs the API
server, the management commands and the board client.
"""

import logging
import os
import sys


ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./task_tracker.db")
TOKEN_EXPIRE_HOURS = int(os.getenv("TOKEN_EXPIRE_HOURS", "24"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

# Board client
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000/api")
NOTICE_TIMEOUT_SECONDS = float(os.getenv("NOTICE_TIMEOUT_SECONDS", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord has; anything else came in through extra={...}
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends the fields passed via ``extra`` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        context = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} | {context}"


def _build_logger() -> logging.Logger:
    log = logging.getLogger("task_tracker")
    log.setLevel(LOG_LEVEL)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ExtraFormatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        log.addHandler(handler)

    log.propagate = False
    return log


logger = _build_logger()
