"""Host framework integrations."""

from __future__ import annotations

from reqnorm.integration.asgi import (
    NormalizerMiddleware,
    get_parameters,
    get_request_format,
)

__all__ = ["NormalizerMiddleware", "get_parameters", "get_request_format"]
