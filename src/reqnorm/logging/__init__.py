"""Structured logging helpers for reqnorm."""

from __future__ import annotations

from reqnorm.logging.error_logger import log_decode_error, log_error
from reqnorm.logging.formatters import CompactJSONFormatter, JSONFormatter

__all__ = [
    "CompactJSONFormatter",
    "JSONFormatter",
    "log_decode_error",
    "log_error",
]
