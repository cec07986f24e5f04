"""ASGI middleware running the request filter in front of an application.

Results are published in the ASGI scope state, so with Starlette they are
available as ``request.state.request_format`` and
``request.state.parameters``. A format set in the scope state by an earlier
middleware is kept.

Usage:
    app = NormalizerMiddleware(app, config_dict={"default_format": "json"})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from starlette.datastructures import Headers
from starlette.responses import JSONResponse

from reqnorm.config.models import FilterConfig
from reqnorm.context import RequestContext
from reqnorm.exceptions import BodyDecodeError
from reqnorm.filter import RequestFilter
from reqnorm.logging.error_logger import log_decode_error

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

    from reqnorm.codecs.registry import CodecRegistry
    from reqnorm.negotiation import NegotiationStrategy

logger = logging.getLogger(__name__)


async def _read_body(receive: Receive) -> bytes | None:
    """Buffer the whole request body.

    Returns None when the client disconnects before the body is complete.
    """
    chunks = []
    while True:
        message = await receive()
        if message["type"] != "http.request":
            return None
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            return b"".join(chunks)


def _replay(body: bytes, receive: Receive) -> Receive:
    sent = False

    async def replay() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


class NormalizerMiddleware:
    """Resolve the request format and decode bodies for an ASGI app.

    Args:
        app: Wrapped ASGI application
        config: Filter configuration object
        config_dict: Filter configuration as a plain dict
        config_file: Path to a YAML/JSON configuration file
        registry: Codec registry shared with the application
        negotiator: Accept header negotiation strategy
    """

    def __init__(
        self,
        app: ASGIApp,
        config: FilterConfig | None = None,
        config_dict: dict[str, Any] | None = None,
        config_file: str | Path | None = None,
        registry: CodecRegistry | None = None,
        negotiator: NegotiationStrategy | None = None,
    ):
        self.app = app
        if config is None:
            if config_file is not None:
                self.filter = RequestFilter.from_file(
                    config_file, registry=registry, negotiator=negotiator
                )
                return
            config = FilterConfig.from_dict(config_dict or {})
        self.filter = RequestFilter(config, registry=registry, negotiator=negotiator)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        ctx = RequestContext.from_headers(
            scope["method"],
            Headers(scope=scope).items(),
            request_format=state.get("request_format"),
        )

        if self.filter.wants_body(ctx):
            body = await _read_body(receive)
            if body is None:
                logger.debug("Client disconnected before the body was complete")
                return
            ctx.body = body
            receive = _replay(body, receive)
            logger.debug("Buffered %d byte request body", len(ctx.body))

        try:
            self.filter.on_request(ctx)
        except BodyDecodeError as e:
            log_decode_error(e, method=ctx.method, content_type=ctx.content_type)
            response = JSONResponse(
                {"error": e.code, "message": e.message}, status_code=e.status_code
            )
            await response(scope, receive, send)
            return

        state["request_format"] = ctx.request_format
        state["parameters"] = ctx.parameters
        await self.app(scope, receive, send)


def get_request_format(request: Request) -> str | None:
    return getattr(request.state, "request_format", None)


def get_parameters(request: Request) -> dict[str, Any]:
    return getattr(request.state, "parameters", {})
