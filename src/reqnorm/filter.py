from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from reqnorm.codecs.registry import CodecRegistry
from reqnorm.config.loader import ConfigLoader
from reqnorm.config.models import FilterConfig
from reqnorm.decoder import BodyDecoder
from reqnorm.formats import FormatTable
from reqnorm.negotiation import WildcardNegotiator
from reqnorm.resolver import FormatResolver

if TYPE_CHECKING:
    from reqnorm.context import RequestContext
    from reqnorm.negotiation import NegotiationStrategy

logger = logging.getLogger(__name__)


class RequestFilter:
    """Resolve the request format, then decode the body if enabled.

    Args:
        config: Filter configuration
        registry: Codec registry; built from ``config.formats`` when omitted.
            Only ``get_decoder`` is required; a ``formats`` attribute, when
            present, lets ``wants_body`` skip buffering bodies no codec reads
        formats: MIME type table; the default table extended with
            ``config.mime_types`` when omitted
        negotiator: Accept header strategy; ``WildcardNegotiator`` when
            ``config.negotiation_priorities`` is set, else the resolver default
    """

    def __init__(
        self,
        config: FilterConfig | None = None,
        registry: CodecRegistry | None = None,
        formats: FormatTable | None = None,
        negotiator: NegotiationStrategy | None = None,
    ):
        self.config = config or FilterConfig()
        if formats is None:
            formats = FormatTable()
            for format, mime_types in self.config.mime_types.items():
                formats.set_format(format, mime_types)
        self.formats = formats
        self.registry = registry or CodecRegistry(self.config.formats)

        if negotiator is None and self.config.negotiation_priorities:
            negotiator = WildcardNegotiator(self.config.negotiation_priorities)

        self.resolver = FormatResolver(
            detect_format=self.config.detect_format,
            default_format=self.config.default_format,
            formats=self.formats,
            negotiator=negotiator,
        )
        self.decoder = BodyDecoder(
            formats=self.formats,
            enabled=self.config.decode_body,
            methods=self.config.decode_methods,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> RequestFilter:
        return cls(FilterConfig.from_dict(data), **kwargs)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> RequestFilter:
        return cls(ConfigLoader().load_from_file(path), **kwargs)

    def wants_body(self, ctx: RequestContext) -> bool:
        """Whether the raw body is needed to process this request."""
        if not self.decoder.should_decode(ctx):
            return False
        formats = getattr(self.registry, "formats", None)
        if formats is None:
            return True
        return self.formats.get_format(ctx.content_type) in formats

    def on_request(self, ctx: RequestContext) -> None:
        self.resolver.resolve(ctx)
        if self.config.decode_body:
            self.decoder.maybe_decode(ctx, self.registry)
