"""Capability protocols for codecs.

A codec may implement either or both. The filter only needs ``Decoder``;
``Encoder`` is there for hosts that serialize responses with the same
registry.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Decoder(Protocol):
    def decode(self, data: bytes, format: str) -> Any:
        """Decode raw bytes in ``format`` into a structured value.

        Raises:
            BodyDecodeError: If the data is malformed for the format
        """
        ...


@runtime_checkable
class Encoder(Protocol):
    def encode(self, data: Any, format: str) -> bytes:
        """Encode a structured value into ``format``."""
        ...
