"""
ChowPilot Logging Setup (Structured JSON)

Modules log through ``logging.getLogger(__name__)`` under the ``chowpilot``
namespace. Entry points (CLI, service) call ``configure_logging`` once.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

# Extra attributes copied into the JSON entry when present on the record
EXTRA_FIELDS = (
    "request_id",
    "case_ref",
    "risk_level",
    "rule_id",
    "duration_ms",
    "stage",
    "issue_identifier",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Install the JSON handler on the ``chowpilot`` logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("chowpilot")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    return logger
