"""Accept header parsing and format negotiation strategies.

A negotiation strategy is any callable taking the raw ``Accept`` header and
a :class:`~reqnorm.formats.FormatTable` and returning a format identifier or
``None``. :func:`preferred_format` is the default; :class:`WildcardNegotiator`
adds wildcard expansion against a list of server-side priorities.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from reqnorm.formats import FormatTable

logger = logging.getLogger(__name__)

__all__ = [
    "AcceptEntry",
    "NegotiationStrategy",
    "WildcardNegotiator",
    "parse_accept_header",
    "preferred_format",
]


@dataclass(frozen=True)
class AcceptEntry:
    """One media range of an Accept header."""

    mime_type: str
    quality: float = 1.0
    position: int = 0
    params: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def type(self) -> str:
        return self.mime_type.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        return self.mime_type.split("/", 1)[1]

    @property
    def is_wildcard(self) -> bool:
        return self.subtype == "*"

    def matches(self, mime_type: str) -> bool:
        if self.mime_type == "*/*":
            return True
        if self.is_wildcard:
            return mime_type.split("/", 1)[0] == self.type
        return mime_type == self.mime_type


def _parse_entry(raw: str, position: int) -> AcceptEntry | None:
    parts = [p.strip() for p in raw.split(";")]
    mime_type = parts[0].lower()
    if mime_type.count("/") != 1 or not all(mime_type.split("/")):
        return None

    quality = 1.0
    params: dict[str, str] = {}
    for param in parts[1:]:
        if not param:
            continue
        key, sep, value = param.partition("=")
        if not sep:
            return None
        key = key.strip().lower()
        value = value.strip().strip('"')
        if key == "q":
            try:
                quality = float(value)
            except ValueError:
                return None
            if not 0.0 <= quality <= 1.0:
                return None
        else:
            params[key] = value

    return AcceptEntry(mime_type, quality, position, params)


def parse_accept_header(header: str | None) -> list[AcceptEntry]:
    """Parse an Accept header into entries ordered by preference.

    Higher ``q`` first; equal weights keep declaration order. Malformed
    entries are skipped, and ``q=0`` entries (explicitly not acceptable)
    are dropped.
    """
    if not header:
        return []

    entries = []
    for position, raw in enumerate(header.split(",")):
        raw = raw.strip()
        if not raw:
            continue
        entry = _parse_entry(raw, position)
        if entry is None:
            logger.debug("Skipping malformed Accept entry: %r", raw)
            continue
        if entry.quality == 0.0:
            continue
        entries.append(entry)

    # sorted() is stable, so position breaks ties on its own
    return sorted(entries, key=lambda e: -e.quality)


class NegotiationStrategy(Protocol):
    def __call__(self, accept_header: str | None, formats: FormatTable) -> str | None:
        ...


def preferred_format(accept_header: str | None, formats: FormatTable) -> str | None:
    """Map the single most preferred media range to a format."""
    entries = parse_accept_header(accept_header)
    if not entries:
        return None
    return formats.get_format(entries[0].mime_type)


class WildcardNegotiator:
    """Walk the Accept entries in preference order until one resolves.

    Exact media ranges resolve through the format table. ``type/*`` and
    ``*/*`` resolve to the first of ``priorities`` whose MIME types match.
    When ``priorities`` is non-empty it also restricts exact matches to the
    formats it lists.
    """

    def __init__(self, priorities: list[str] | None = None):
        self.priorities = list(priorities or [])

    def __call__(self, accept_header: str | None, formats: FormatTable) -> str | None:
        for entry in parse_accept_header(accept_header):
            if entry.mime_type == "*/*" or entry.is_wildcard:
                format = self._expand_wildcard(entry, formats)
            else:
                format = formats.get_format(entry.mime_type)
                if self.priorities and format not in self.priorities:
                    format = None
            if format is not None:
                return format
        return None

    def _expand_wildcard(self, entry: AcceptEntry, formats: FormatTable) -> str | None:
        for format in self.priorities:
            if any(entry.matches(m) for m in formats.get_mime_types(format)):
                return format
        return None

    def __repr__(self) -> str:
        return f"WildcardNegotiator(priorities={self.priorities!r})"
