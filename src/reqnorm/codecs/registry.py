"""Registry for codecs."""

from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, Union

from reqnorm.codecs.protocol import Decoder, Encoder
from reqnorm.exceptions import CodecNotFoundError

logger = logging.getLogger(__name__)

CodecFactory = Callable[[], Any]

# A registered codec name, a "module:attribute" import path, or a factory
CodecLocator = Union[str, CodecFactory]

# Registry of codec factories
_CODECS: dict[str, CodecFactory] = {}


def register_codec(name: str, factory: CodecFactory) -> None:
    """Register a codec factory.

    Args:
        name: Codec name (e.g., "json", "xml"), case-insensitive
        factory: Callable returning a codec instance

    Example:
        register_codec("json", lambda: JSONCodec())
    """
    name_lower = name.lower()
    _CODECS[name_lower] = factory
    logger.debug(f"Registered codec: {name_lower}")


def get_codec_factory(name: str) -> CodecFactory:
    """Get a codec factory by name.

    Raises:
        CodecNotFoundError: If the name is not registered
    """
    factory = _CODECS.get(name.lower())
    if factory is None:
        raise CodecNotFoundError(name)
    return factory


def list_codecs() -> list[str]:
    """List all registered codec names.

    Returns:
        Sorted list of codec names
    """
    return sorted(_CODECS.keys())


def _import_factory(path: str) -> CodecFactory:
    module_name, _, attribute = path.partition(":")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise CodecNotFoundError(path, cause=e) from e
    if not callable(factory):
        raise CodecNotFoundError(path)
    return factory


def resolve_locator(locator: CodecLocator) -> CodecFactory:
    """Turn a codec locator into a factory.

    Raises:
        CodecNotFoundError: If the locator cannot be resolved
    """
    if callable(locator):
        return locator
    if ":" in locator:
        return _import_factory(locator)
    return get_codec_factory(locator)


class CodecRegistry:
    """Per-format codec lookup with lazy, memoized construction.

    Locators are resolved when the registry is built, so configuration
    mistakes fail at start-up. Codec instances are only created on first
    use, at most once per format even under concurrent first use.
    """

    def __init__(self, formats: Mapping[str, CodecLocator] | None = None):
        self._factories: dict[str, CodecFactory] = {}
        self._codecs: dict[str, Any] = {}
        self._lock = threading.Lock()
        for format, locator in (formats or {}).items():
            if not locator:
                continue
            try:
                self._factories[format] = resolve_locator(locator)
            except CodecNotFoundError as e:
                e.context["format"] = format
                raise

    @property
    def formats(self) -> list[str]:
        return sorted(set(self._factories) | set(self._codecs))

    def register(self, format: str, codec: Any) -> None:
        """Use a ready codec instance for ``format``."""
        with self._lock:
            self._codecs[format] = codec

    def get_codec(self, format: str | None) -> Any | None:
        if format is None:
            return None

        codec = self._codecs.get(format)
        if codec is not None:
            return codec

        factory = self._factories.get(format)
        if factory is None:
            return None

        with self._lock:
            codec = self._codecs.get(format)
            if codec is None:
                codec = factory()
                self._codecs[format] = codec
                logger.debug("Created codec %r for format %s", codec, format)
        return codec

    def get_decoder(self, format: str | None) -> Decoder | None:
        codec = self.get_codec(format)
        return codec if isinstance(codec, Decoder) else None

    def get_encoder(self, format: str | None) -> Encoder | None:
        codec = self.get_codec(format)
        return codec if isinstance(codec, Encoder) else None
