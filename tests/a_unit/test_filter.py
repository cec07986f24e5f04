"""Tests for the combined request filter."""

from __future__ import annotations

import pytest

from reqnorm.codecs import CodecRegistry
from reqnorm.config.models import FilterConfig
from reqnorm.context import RequestContext
from reqnorm.exceptions import InvalidJSONError
from reqnorm.filter import RequestFilter
from reqnorm.negotiation import WildcardNegotiator
from tests.utils import CountingFactory, StubDecoder


def test_default_filter_resolves_and_decodes():
    request_filter = RequestFilter()
    ctx = RequestContext(
        method="POST",
        accept="application/xml",
        content_type="application/json",
        body=b'{"a": 1}',
    )

    request_filter.on_request(ctx)

    assert ctx.request_format == "xml"
    assert ctx.parameters == {"a": 1}


def test_decode_body_disabled():
    request_filter = RequestFilter(FilterConfig(decode_body=False))
    ctx = RequestContext(
        method="POST", content_type="application/json", body=b'{"a": 1}'
    )

    request_filter.on_request(ctx)

    assert ctx.parameters == {}


def test_format_resolved_before_decode_error():
    request_filter = RequestFilter(FilterConfig(default_format="json"))
    ctx = RequestContext(
        method="POST", content_type="application/json", body=b"{invalid"
    )

    with pytest.raises(InvalidJSONError):
        request_filter.on_request(ctx)

    assert ctx.request_format == "json"
    assert ctx.parameters == {}


def test_from_dict():
    request_filter = RequestFilter.from_dict(
        {"detect_format": False, "default_format": "json", "formats": {"form": "form"}}
    )
    ctx = RequestContext(
        method="POST",
        accept="text/xml",
        content_type="application/x-www-form-urlencoded",
        body=b"a=1&b=2",
    )

    request_filter.on_request(ctx)

    assert ctx.request_format == "json"
    assert ctx.parameters == {"a": "1", "b": "2"}


def test_from_file(tmp_path):
    path = tmp_path / "reqnorm.yaml"
    path.write_text("default_format: xml\ndecode_body: false\n")

    request_filter = RequestFilter.from_file(path)

    assert request_filter.config.default_format == "xml"
    assert request_filter.decoder.enabled is False


def test_extra_mime_types():
    request_filter = RequestFilter(
        FilterConfig(
            formats={"json": "json"},
            mime_types={"json": ["application/vnd.api+json"]},
        )
    )
    ctx = RequestContext(
        method="POST",
        accept="application/vnd.api+json",
        content_type="application/vnd.api+json",
        body=b'{"data": []}',
    )

    request_filter.on_request(ctx)

    assert ctx.request_format == "json"
    assert ctx.parameters == {"data": []}


def test_priorities_select_wildcard_negotiator():
    request_filter = RequestFilter(FilterConfig(negotiation_priorities=["json"]))
    assert isinstance(request_filter.resolver.negotiator, WildcardNegotiator)

    ctx = RequestContext(accept="*/*")
    request_filter.on_request(ctx)
    assert ctx.request_format == "json"


def test_explicit_negotiator_wins():
    def negotiator(accept_header, formats):
        return "txt"

    request_filter = RequestFilter(
        FilterConfig(negotiation_priorities=["json"]), negotiator=negotiator
    )
    ctx = RequestContext(accept="*/*")
    request_filter.on_request(ctx)

    assert ctx.request_format == "txt"


def test_shared_registry_is_used():
    factory = CountingFactory()
    registry = CodecRegistry({"json": factory})
    request_filter = RequestFilter(registry=registry)

    for _ in range(3):
        request_filter.on_request(
            RequestContext(method="POST", content_type="application/json", body=b"x")
        )

    assert factory.created == 1
    assert len(registry.get_decoder("json").calls) == 3


def test_wants_body():
    request_filter = RequestFilter()

    assert request_filter.wants_body(
        RequestContext(method="POST", content_type="application/json")
    )
    assert not request_filter.wants_body(
        RequestContext(method="GET", content_type="application/json")
    )
    assert not request_filter.wants_body(
        RequestContext(method="POST", content_type="application/x-www-form-urlencoded")
    )
    assert not request_filter.wants_body(
        RequestContext(
            method="POST", content_type="application/json", parameters={"a": 1}
        )
    )


class DecoderOnlyRegistry:
    """Registry exposing nothing but get_decoder."""

    def __init__(self, decoder):
        self.decoder = decoder

    def get_decoder(self, format):
        return self.decoder if format == "json" else None


def test_registry_with_only_get_decoder():
    stub = StubDecoder({"a": 1})
    request_filter = RequestFilter(registry=DecoderOnlyRegistry(stub))
    ctx = RequestContext(method="POST", content_type="application/json", body=b"x")

    assert request_filter.wants_body(ctx)
    request_filter.on_request(ctx)

    assert ctx.parameters == {"a": 1}
    assert not request_filter.wants_body(RequestContext(method="GET"))
