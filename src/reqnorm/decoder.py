"""Request body decoding into parameters."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from reqnorm.exceptions import BodyDecodeError
from reqnorm.formats import FormatTable

if TYPE_CHECKING:
    from reqnorm.codecs.registry import CodecRegistry
    from reqnorm.context import RequestContext

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "DELETE")


def to_parameters(value: Any) -> dict[str, Any]:
    """Coerce a decoded body into a fresh ``str -> value`` dict."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {str(k): v for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return {str(i): v for i, v in enumerate(value)}
    return {"0": value}


class BodyDecoder:
    """Replace empty request parameters with the decoded request body.

    Only requests using one of ``methods`` whose parameters are still empty
    are considered. A content type with no format, or a format with no
    decoder, leaves the request untouched; a malformed body raises
    :class:`~reqnorm.exceptions.BodyDecodeError`.
    """

    def __init__(
        self,
        formats: FormatTable | None = None,
        enabled: bool = True,
        methods: Iterable[str] = BODY_METHODS,
    ):
        self.formats = formats or FormatTable()
        self.enabled = enabled
        self.methods = frozenset(m.upper() for m in methods)

    def should_decode(self, ctx: RequestContext) -> bool:
        return self.enabled and not ctx.parameters and ctx.method in self.methods

    def maybe_decode(self, ctx: RequestContext, registry: CodecRegistry) -> None:
        if not self.should_decode(ctx):
            return

        content_format = self.formats.get_format(ctx.content_type)
        if content_format is None:
            logger.debug("No format for content type %r", ctx.content_type)
            return

        decoder = registry.get_decoder(content_format)
        if decoder is None:
            logger.debug("No decoder available for format %s", content_format)
            return

        try:
            decoded = decoder.decode(ctx.body, content_format)
        except BodyDecodeError as e:
            if e.context.get("content_type") is None:
                e.context["content_type"] = ctx.content_type
            raise
        except (ValueError, TypeError, RecursionError) as e:
            raise BodyDecodeError(
                f"Could not decode {content_format} body: {e}",
                format=content_format,
                content_type=ctx.content_type,
                body_snippet=ctx.body,
                cause=e,
            ) from e

        ctx.parameters = to_parameters(decoded)
        logger.debug(
            "Decoded %s body into %d parameters", content_format, len(ctx.parameters)
        )
