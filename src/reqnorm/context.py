from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class RequestContext:
    """Mutable state of one in-flight request.

    ``request_format`` is the format slot; a value set before the filter
    runs (e.g. from a path suffix) is never overridden. ``parameters`` holds
    already-parsed body parameters and is replaced wholesale when the body
    is decoded.
    """

    method: str = "GET"
    accept: str = ""
    content_type: str = ""
    body: bytes = b""
    parameters: dict[str, Any] = field(default_factory=dict)
    request_format: str | None = None

    def __post_init__(self):
        self.method = self.method.upper()

    @classmethod
    def from_headers(
        cls,
        method: str,
        headers: Mapping[str, str] | Iterable[tuple[str, str]],
        body: bytes = b"",
        parameters: dict[str, Any] | None = None,
        request_format: str | None = None,
    ) -> RequestContext:
        """Build a context from a header mapping or a list of header pairs.

        Header names are matched case-insensitively.
        """
        items = headers.items() if isinstance(headers, Mapping) else headers
        lowered = {name.lower(): value for name, value in items}
        return cls(
            method=method,
            accept=lowered.get("accept", ""),
            content_type=lowered.get("content-type", ""),
            body=body,
            parameters=dict(parameters or {}),
            request_format=request_format,
        )
