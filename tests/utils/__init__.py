"""Stub codecs and helpers shared by the test suites."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from typing import Any

from reqnorm.exceptions import BodyDecodeError


class StubDecoder:
    """Decoder returning a fixed value and recording its calls."""

    def __init__(self, result: Any = None):
        self.result = result
        self.calls: list[tuple[bytes, str]] = []

    def decode(self, data: bytes, format: str) -> Any:
        self.calls.append((data, format))
        return self.result


class EncoderOnlyCodec:
    """Codec without the decode capability."""

    def encode(self, data: Any, format: str) -> bytes:
        return repr(data).encode()


class FailingDecoder:
    """Decoder that always rejects its input."""

    def __init__(self, error: Exception | None = None):
        self.error = error or BodyDecodeError("Stub decode failure")

    def decode(self, data: bytes, format: str) -> Any:
        raise self.error


class CountingFactory:
    """Codec factory that counts how many instances it created."""

    def __init__(self, codec_class: type = StubDecoder):
        self.codec_class = codec_class
        self.created = 0

    def __call__(self) -> Any:
        self.created += 1
        return self.codec_class()


def import_module_from_file(module_name: str, file_path: Path):
    """Import a module from a file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec and spec.loader:
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
        return module
    msg = f"Could not load module from {file_path}"
    raise ImportError(msg)
