"""Request format resolution.

Precedence, highest first:

1. a format already present on the request
2. the format negotiated from the Accept header
3. the configured default format

With detection disabled only the first and last tiers apply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reqnorm.formats import FormatTable
from reqnorm.negotiation import preferred_format

if TYPE_CHECKING:
    from reqnorm.context import RequestContext
    from reqnorm.negotiation import NegotiationStrategy

logger = logging.getLogger(__name__)


class FormatResolver:
    def __init__(
        self,
        detect_format: bool = True,
        default_format: str | None = None,
        formats: FormatTable | None = None,
        negotiator: NegotiationStrategy | None = None,
    ):
        self.detect_format = detect_format
        self.default_format = default_format
        self.formats = formats or FormatTable()
        self.negotiator = negotiator or preferred_format

    def resolve(self, ctx: RequestContext) -> None:
        if ctx.request_format is not None:
            return

        if not self.detect_format:
            if self.default_format is not None:
                ctx.request_format = self.default_format
            return

        format = self.negotiate(ctx)
        if format is None:
            format = self.default_format
            logger.debug("No format negotiated, using default: %s", format)
        else:
            logger.debug("Negotiated format %s from Accept: %r", format, ctx.accept)
        ctx.request_format = format

    def negotiate(self, ctx: RequestContext) -> str | None:
        return self.negotiator(ctx.accept, self.formats)
