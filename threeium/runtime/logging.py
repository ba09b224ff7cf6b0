from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, TextIO

from threeium.common.logging import sanitize_text, sanitize_value

LOGGER_NAME = "threeium"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
RESERVED_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; structured ``extra`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }

        payload.update(
            (key, sanitize_value(value))
            for key, value in vars(record).items()
            if key not in RESERVED_RECORD_FIELDS and not key.startswith("_")
        )

        if record.exc_info:
            payload["exception"] = sanitize_text(self.formatException(record.exc_info))

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(level: int | str, *, stream: TextIO | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    return logger
