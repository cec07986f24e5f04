"""Request format resolution and body decoding for HTTP pipelines."""

from __future__ import annotations

from reqnorm.codecs import CodecRegistry, Decoder, Encoder, register_codec
from reqnorm.config import FilterConfig, load_config
from reqnorm.context import RequestContext
from reqnorm.decoder import BodyDecoder
from reqnorm.exceptions import BodyDecodeError, NormalizerError
from reqnorm.filter import RequestFilter
from reqnorm.formats import FormatTable
from reqnorm.negotiation import WildcardNegotiator, parse_accept_header, preferred_format
from reqnorm.resolver import FormatResolver

__version__ = "0.1.0"

__all__ = [
    "BodyDecodeError",
    "BodyDecoder",
    "CodecRegistry",
    "Decoder",
    "Encoder",
    "FilterConfig",
    "FormatResolver",
    "FormatTable",
    "NormalizerError",
    "RequestContext",
    "RequestFilter",
    "WildcardNegotiator",
    "load_config",
    "parse_accept_header",
    "preferred_format",
    "register_codec",
]
