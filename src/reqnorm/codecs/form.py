"""URL-encoded form codec."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs, urlencode

from reqnorm.exceptions import BodyDecodeError


class FormCodec:
    """Decode ``application/x-www-form-urlencoded`` bodies.

    Keys that appear once map to a string, repeated keys to a list.
    """

    def decode(self, data: bytes, format: str) -> dict[str, Any]:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BodyDecodeError(
                "Form body is not valid UTF-8",
                format=format,
                body_snippet=data,
                cause=e,
            ) from e

        result: dict[str, Any] = {}
        for key, values in parse_qs(text, keep_blank_values=True).items():
            result[key] = values[0] if len(values) == 1 else values
        return result

    def encode(self, data: Any, format: str) -> bytes:
        return urlencode(data, doseq=True).encode("utf-8")
