"""Logging setup for the invite endpoint.

Development gets one readable line per record. Production emits JSON lines so
the hosting platform can index the caller and company behind each rejected or
completed invite.
"""

import json
import logging
import sys
from datetime import UTC, datetime

# Attributes passed through ``extra=`` that identify who invited into which company
CONTEXT_FIELDS = ("user_id", "company_id", "request_id")

DEV_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def log_context(**fields) -> dict:
    """Build an ``extra=`` mapping from known context fields, dropping unset ones."""
    return {key: value for key, value in fields.items() if key in CONTEXT_FIELDS and value is not None}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with invite context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
        }
        log_entry.update(
            {key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)}
        )

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(app_env: str = "development", log_level: str = "INFO") -> None:
    """Install a single stdout handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(log_level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if app_env == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)

    # httpx logs every Supabase request URL, including user filters, at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
