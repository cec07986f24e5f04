"""Configuration data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any


def _default_formats() -> dict[str, str]:
    return {"json": "json", "xml": "xml"}


def _default_methods() -> list[str]:
    return ["POST", "PUT", "DELETE"]


@dataclass
class FilterConfig:
    """Request filter configuration.

    Attributes:
        detect_format: Negotiate the format from the Accept header
        default_format: Format used when nothing else applies
        decode_body: Decode request bodies into parameters
        formats: Format identifier -> codec locator
        mime_types: Extra MIME types per format, added to the default table
        decode_methods: Methods whose bodies may be decoded
        negotiation_priorities: Server-side format priorities; when set,
            wildcard-aware negotiation is used
    """

    detect_format: bool = True
    default_format: str | None = None
    decode_body: bool = True
    formats: dict[str, str] = field(default_factory=_default_formats)
    mime_types: dict[str, list[str]] = field(default_factory=dict)
    decode_methods: list[str] = field(default_factory=_default_methods)
    negotiation_priorities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilterConfig:
        """Build from a plain dict; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if kwargs.get("formats") is None:
            kwargs.pop("formats", None)
        mime_types = kwargs.get("mime_types") or {}
        kwargs["mime_types"] = {
            format: [types] if isinstance(types, str) else list(types)
            for format, types in mime_types.items()
        }
        return cls(**kwargs)
