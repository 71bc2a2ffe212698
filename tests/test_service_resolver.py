"""Tests for service id/name resolution."""

import pytest

from swresolve.core.exceptions import DecodeError, FormatError, MissingFlagError
from swresolve.core.services.service_resolver import (
    Base64ServiceResolver,
    ServiceResolver,
    decode_service_id,
    encode_service_id,
    resolve_service,
    resolve_service_relation,
)


def test_encode_service_id():
    assert encode_service_id("checkout") == "Y2hlY2tvdXQ=.1"
    assert encode_service_id("checkout", normal=False) == "Y2hlY2tvdXQ=.0"


def test_decode_service_id():
    assert decode_service_id("Y2hlY2tvdXQ=.1") == ("checkout", True)
    assert decode_service_id("Y2hlY2tvdXQ=.0") == ("checkout", False)


@pytest.mark.parametrize("bad_id", ["Y2hlY2tvdXQ=", "Y2hlY2tvdXQ=.2", "a.b.1"])
def test_malformed_service_id(bad_id):
    with pytest.raises(FormatError):
        decode_service_id(bad_id)


def test_undecodable_service_id():
    with pytest.raises(DecodeError):
        decode_service_id("!!.1")


def test_resolve_by_name(make_ctx):
    ctx = make_ctx(service_name="checkout")

    resolve_service(True, ctx)

    assert ctx.get_string("service-id") == "Y2hlY2tvdXQ=.1"


def test_resolve_by_id(make_ctx):
    ctx = make_ctx(service_id="Y2hlY2tvdXQ=.1")

    resolve_service(True, ctx)

    assert ctx.get_string("service-name") == "checkout"


def test_virtual_service(make_ctx):
    ctx = make_ctx(service_name="checkout")

    resolve_service(True, ctx, resolver=Base64ServiceResolver(normal=False))

    assert ctx.get_string("service-id") == "Y2hlY2tvdXQ=.0"


def test_required_service(make_ctx):
    with pytest.raises(MissingFlagError) as exc_info:
        resolve_service(True, make_ctx())

    assert exc_info.value.flags == ("service-id", "service-name")


def test_optional_service_is_noop(make_ctx):
    ctx = make_ctx()

    resolve_service(False, ctx)

    assert ctx.as_dict() == {}


def test_service_relation(make_ctx):
    ctx = make_ctx(service_name="checkout", dest_service_name="payment")

    resolve_service_relation(True, ctx)

    assert ctx.get_string("service-id") == "Y2hlY2tvdXQ=.1"
    assert ctx.get_string("dest-service-id") == "cGF5bWVudA==.1"


def test_default_resolver_satisfies_protocol():
    assert isinstance(Base64ServiceResolver(), ServiceResolver)


def test_unencodable_service_name():
    with pytest.raises(FormatError):
        encode_service_id("\udc80\ud800")


def test_dest_service_exported(make_ctx):
    from swresolve.core import services

    ctx = make_ctx(dest_service_name="payment")

    services.resolve_dest_service(True, ctx)

    assert "resolve_dest_service" in services.__all__
    assert ctx.get_string("dest-service-id") == "cGF5bWVudA==.1"
