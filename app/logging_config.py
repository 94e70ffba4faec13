from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict

_RESERVED_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for stdout logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # extra=... fields with simple values
        for key, value in record.__dict__.items():
            if key in payload or key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, (str, int, float, bool)):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging() -> None:
    """Attach a single stdout handler to the root logger.

    ``LOG_FORMAT=json`` switches to one JSON object per line, anything else
    keeps the plain text format. Calling this twice is a no-op.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    log_format = os.getenv("LOG_FORMAT", "plain").lower()
    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
