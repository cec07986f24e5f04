"""MIME type <-> format identifier table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

DEFAULT_FORMATS: dict[str, tuple[str, ...]] = {
    "html": ("text/html", "application/xhtml+xml"),
    "txt": ("text/plain",),
    "js": ("application/javascript", "application/x-javascript", "text/javascript"),
    "css": ("text/css",),
    "json": ("application/json", "application/x-json"),
    "xml": ("text/xml", "application/xml", "application/x-xml"),
    "rdf": ("application/rdf+xml",),
    "atom": ("application/atom+xml",),
    "rss": ("application/rss+xml",),
    "form": ("application/x-www-form-urlencoded",),
}


def normalize_mime_type(mime_type: str | None) -> str:
    """Drop parameters and whitespace, lower-case the rest.

    >>> normalize_mime_type("Application/JSON; charset=utf-8")
    'application/json'
    """
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


class FormatTable:
    """Bidirectional mapping between format identifiers and MIME types.

    The first MIME type registered for a format is its canonical type.
    """

    def __init__(self, formats: Mapping[str, Iterable[str]] | None = None):
        self._formats: dict[str, tuple[str, ...]] = {}
        self._by_mime_type: dict[str, str] = {}
        for format, mime_types in (formats or DEFAULT_FORMATS).items():
            self.set_format(format, mime_types)

    def set_format(self, format: str, mime_types: str | Iterable[str]) -> None:
        if isinstance(mime_types, str):
            mime_types = [mime_types]
        normalized = tuple(normalize_mime_type(m) for m in mime_types)
        self._formats[format] = normalized
        for mime_type in normalized:
            self._by_mime_type[mime_type] = format

    def get_format(self, mime_type: str | None) -> str | None:
        normalized = normalize_mime_type(mime_type)
        if not normalized:
            return None
        return self._by_mime_type.get(normalized)

    def get_mime_type(self, format: str | None) -> str | None:
        mime_types = self.get_mime_types(format)
        return mime_types[0] if mime_types else None

    def get_mime_types(self, format: str | None) -> tuple[str, ...]:
        if format is None:
            return ()
        return self._formats.get(format, ())

    @property
    def formats(self) -> list[str]:
        return list(self._formats)

    def __contains__(self, format: object) -> bool:
        return format in self._formats

    def __repr__(self) -> str:
        return f"FormatTable({self._formats!r})"


def default_format_table() -> FormatTable:
    return FormatTable(DEFAULT_FORMATS)
