"""Structured error logging.

Each helper emits a single record carrying a ``structured_data`` attribute,
which :class:`~reqnorm.logging.formatters.JSONFormatter` serializes as-is.
"""

from __future__ import annotations

import logging
from typing import Any

from reqnorm.exceptions import BodyDecodeError, NormalizerError

logger = logging.getLogger("reqnorm.errors")


def log_error(
    error: BaseException, level: int = logging.ERROR, **extra: Any
) -> None:
    """Log an exception with its code, category and context."""
    if isinstance(error, NormalizerError):
        data = error.to_dict()
        message = str(error)
    else:
        data = {"error_type": type(error).__name__, "message": str(error)}
        message = f"{type(error).__name__}: {error}"
    data.update(extra)
    logger.log(level, message, extra={"structured_data": data})


def log_decode_error(
    error: BodyDecodeError,
    method: str | None = None,
    content_type: str | None = None,
) -> None:
    """Log a rejected request body.

    Malformed bodies are client errors, so this logs at WARNING.
    """
    extra: dict[str, Any] = {}
    if method is not None:
        extra["method"] = method
    if content_type is not None:
        extra["content_type"] = content_type
    log_error(error, level=logging.WARNING, **extra)
