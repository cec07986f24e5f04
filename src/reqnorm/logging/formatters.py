"""JSON log formatters."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object.

    ``structured_data`` set through ``extra`` is merged into the output.
    """

    def __init__(self, indent: int | None = None, include_logger: bool = True):
        super().__init__()
        self.indent = indent
        self.include_logger = include_logger

    def build_payload(self, record: logging.LogRecord) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if self.include_logger:
            payload["logger"] = record.name
        structured = getattr(record, "structured_data", None)
        if structured:
            payload.update(structured)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return payload

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.build_payload(record), indent=self.indent, default=str)


class CompactJSONFormatter(JSONFormatter):
    """Single-line JSON without the logger name."""

    def __init__(self):
        super().__init__(indent=None, include_logger=False)

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            self.build_payload(record), separators=(",", ":"), default=str
        )
