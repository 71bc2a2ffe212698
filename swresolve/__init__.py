"""
swresolve - instance identifier resolution for command-line flags.

A command may be given an instance either by its opaque id or by its name.
The resolvers fill in whichever is missing, directly in the flag values:

Quick Start:
    >>> from swresolve import DictFlagContext, parse_instance
    >>> ctx = DictFlagContext({"service-name": "checkout", "instance-name": "pod-1"})
    >>> parse_instance(required=True)(ctx)
    >>> ctx.get_string("instance-id")
    'Y2hlY2tvdXQ=.1_cG9kLTE='

Architecture:
    CLI flags → FlagContext → ServiceResolver → resolve_instance(_list) → InstanceCodec
"""

__version__ = "0.1.0"

from swresolve.core.config import INSTANCE_ID_LIST_FLAG, FlagNames, ResolverConfig
from swresolve.core.context import DictFlagContext, FlagContext, NamespaceFlagContext
from swresolve.core.exceptions import (
    ConfigurationError,
    DecodeError,
    FormatError,
    MissingDependencyError,
    MissingFlagError,
    ResolverError,
    WriteError,
)
from swresolve.core.services import (
    Base64ServiceResolver,
    InstanceCodec,
    ResolvedInstance,
    ServiceResolver,
    parse_instance,
    parse_instance_list,
    parse_instance_relation,
    resolve_instance,
    resolve_instance_list,
    resolve_instance_relation,
)

__all__ = [
    "INSTANCE_ID_LIST_FLAG",
    "Base64ServiceResolver",
    "ConfigurationError",
    "DecodeError",
    "DictFlagContext",
    "FlagContext",
    "FlagNames",
    "FormatError",
    "InstanceCodec",
    "MissingDependencyError",
    "MissingFlagError",
    "NamespaceFlagContext",
    "ResolvedInstance",
    "ResolverConfig",
    "ResolverError",
    "ServiceResolver",
    "WriteError",
    "__version__",
    "parse_instance",
    "parse_instance_list",
    "parse_instance_relation",
    "resolve_instance",
    "resolve_instance_list",
    "resolve_instance_relation",
]
