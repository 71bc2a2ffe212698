"""Tests for flag contexts."""

import argparse

import pytest

from swresolve.core.context import DictFlagContext, FlagContext, NamespaceFlagContext
from swresolve.core.exceptions import WriteError
from swresolve.core.services.relation_resolver import parse_instance


def test_dict_context_defaults_to_empty_string():
    ctx = DictFlagContext({"instance-name": None})

    assert ctx.get_string("instance-name") == ""
    assert ctx.get_string("unknown") == ""


def test_dict_context_write_and_snapshot():
    ctx = DictFlagContext()

    ctx.set_string("instance-id", "svc_WA==")

    assert ctx.as_dict() == {"instance-id": "svc_WA=="}
    assert "instance-id" in ctx


def test_dict_context_rejects_undeclared_flag():
    ctx = DictFlagContext(declared=["instance-id"])

    with pytest.raises(WriteError, match="no such flag"):
        ctx.set_string("instance-name", "X")


def test_contexts_satisfy_protocol():
    assert isinstance(DictFlagContext(), FlagContext)
    assert isinstance(NamespaceFlagContext(argparse.Namespace()), FlagContext)


def _parser():
    parser = argparse.ArgumentParser()
    for flag in ("service-id", "service-name", "instance-id", "instance-name"):
        parser.add_argument(f"--{flag}", default="")
    return parser


def test_namespace_context_resolves_parsed_args():
    args = _parser().parse_args(["--service-name", "checkout", "--instance-name", "pod-1"])

    parse_instance(True)(NamespaceFlagContext(args))

    assert args.service_id == "Y2hlY2tvdXQ=.1"
    assert args.instance_id == "Y2hlY2tvdXQ=.1_cG9kLTE="


def test_namespace_context_unset_and_unknown():
    ctx = NamespaceFlagContext(argparse.Namespace(instance_id=None))

    assert ctx.get_string("instance-id") == ""
    with pytest.raises(WriteError):
        ctx.set_string("instance-name", "X")
