"""JSON codec."""

from __future__ import annotations

import json
from typing import Any

from reqnorm.exceptions import InvalidJSONError


class JSONCodec:
    """Decode and encode ``application/json`` bodies (UTF-8)."""

    def __init__(self, ensure_ascii: bool = False):
        self.ensure_ascii = ensure_ascii

    def decode(self, data: bytes, format: str) -> Any:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidJSONError(
                "Body is not valid UTF-8", format=format, body_snippet=data, cause=e
            ) from e

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidJSONError(
                f"Invalid JSON syntax: {e.msg} at line {e.lineno} column {e.colno}",
                format=format,
                body_snippet=text,
                cause=e,
            ) from e
        except RecursionError as e:
            raise InvalidJSONError(
                "JSON document is nested too deeply",
                format=format,
                body_snippet=text,
                cause=e,
            ) from e

    def encode(self, data: Any, format: str) -> bytes:
        return json.dumps(data, ensure_ascii=self.ensure_ascii).encode("utf-8")
