"""Codecs turning request bodies into parameters.

This package provides codecs for:
- json: application/json
- xml: text/xml, application/xml
- form: application/x-www-form-urlencoded

Codecs are looked up per format through a CodecRegistry, which builds each
one lazily from the locator configured for that format.
"""

from reqnorm.codecs.form import FormCodec
from reqnorm.codecs.json import JSONCodec
from reqnorm.codecs.protocol import Decoder, Encoder
from reqnorm.codecs.registry import (
    CodecRegistry,
    get_codec_factory,
    list_codecs,
    register_codec,
)
from reqnorm.codecs.xml import XMLCodec

# Register built-in codecs
register_codec("json", lambda: JSONCodec())
register_codec("xml", lambda: XMLCodec())
register_codec("form", lambda: FormCodec())

__all__ = [
    "CodecRegistry",
    "Decoder",
    "Encoder",
    "FormCodec",
    "JSONCodec",
    "XMLCodec",
    "get_codec_factory",
    "list_codecs",
    "register_codec",
]
