"""Tests for the instance id codec."""

import base64

import pytest

from swresolve.core.config import ResolverConfig
from swresolve.core.exceptions import DecodeError, FormatError, MissingDependencyError
from swresolve.core.floats import FloatContext
from swresolve.core.services.codec import (
    InstanceCodec,
    ResolvedInstance,
    decode_instance_name,
    encode_instance_id,
)


@pytest.fixture
def codec():
    return InstanceCodec()


def test_name_to_id(codec):
    resolved = codec.resolve("svc", name="X")

    assert resolved == ResolvedInstance(instance_id="svc_WA==", instance_name="X")


def test_id_to_name(codec):
    resolved = codec.resolve("", id="svc_WA==")

    assert resolved.instance_id == "svc_WA=="
    assert resolved.instance_name == "X"


def test_id_wins_over_given_name(codec):
    """The name is always the one encoded in the id."""
    resolved = codec.resolve("svc", name="other", id="svc_WA==")

    assert resolved.instance_name == "X"


def test_id_prefix_is_not_checked_against_service(codec):
    resolved = codec.resolve("svc", id="elsewhere_WA==")

    assert resolved.instance_id == "elsewhere_WA=="
    assert resolved.instance_name == "X"


def test_both_empty_resolves_to_empty(codec):
    resolved = codec.resolve("svc")

    assert resolved.is_empty
    assert resolved.instance_id == ""
    assert resolved.instance_name == ""


@pytest.mark.parametrize(
    "name",
    ["X", "pod-1@10.0.0.1", "with_underscore", "with,comma", "名前", "🚀 rocket", " "],
)
def test_round_trip(codec, name):
    instance_id = codec.encode("c2Vydmlj.1", name)

    assert codec.decode(instance_id) == name


def test_round_trip_preserves_non_utf8_bytes(codec):
    raw = b"\xff\xfeinst"
    instance_id = "svc_" + base64.b64encode(raw).decode()

    name = codec.decode(instance_id)

    assert name.encode("utf-8", "surrogateescape") == raw
    assert codec.encode("svc", name) == instance_id


@pytest.mark.parametrize("bad_id", ["noUnderscoreHere", "a_b_c", "svc_WA==_"])
def test_malformed_id(codec, bad_id):
    with pytest.raises(FormatError) as exc_info:
        codec.resolve("svc", id=bad_id)

    assert exc_info.value.value == bad_id
    assert bad_id in str(exc_info.value)


@pytest.mark.parametrize("bad_id", ["svc_!!!!", "svc_QQ", "svc_Q"])
def test_undecodable_id(codec, bad_id):
    with pytest.raises(DecodeError) as exc_info:
        codec.resolve("svc", id=bad_id)

    assert exc_info.value.value == bad_id
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert str(exc_info.value) == str(exc_info.value.__cause__)


def test_name_without_service(codec):
    with pytest.raises(MissingDependencyError) as exc_info:
        codec.resolve("", name="X")

    assert exc_info.value.flag == "instance-name"
    assert '"--instance-name" is specified' in str(exc_info.value)


def test_name_without_service_names_given_flag(codec):
    with pytest.raises(MissingDependencyError, match="--instance-name-list"):
        codec.resolve("", name="X", name_flag="instance-name-list")


def test_custom_separator():
    codec = InstanceCodec(ResolverConfig(id_separator=":"))

    assert codec.encode("svc", "X") == "svc:WA=="
    assert codec.decode("svc:WA==") == "X"
    with pytest.raises(FormatError):
        codec.decode("svc_WA==")


def test_module_helpers():
    assert encode_instance_id("svc", "Y") == "svc_WQ=="
    assert decode_instance_name("svc_WQ==") == "Y"


def test_codec_floats(codec):
    with FloatContext() as fc:
        codec.resolve("svc", name="X")
        codec.resolve("", id="svc_WA==")

    assert fc.get_float("codec.encoded")["instance_id"] == "svc_WA=="
    assert fc.get_float("codec.decoded")["instance_name"] == "X"
    assert fc.count_floats("codec.*") == 2


def test_unencodable_name(codec):
    with pytest.raises(FormatError) as exc_info:
        codec.resolve("svc", name="\ud800")

    assert exc_info.value.value == "\ud800"
    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
