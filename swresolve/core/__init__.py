"""Core module for swresolve - configuration, errors and flag contexts."""

from swresolve.core.config import INSTANCE_ID_LIST_FLAG, FlagNames, ResolverConfig, get_config
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

__all__ = [
    "INSTANCE_ID_LIST_FLAG",
    "ConfigurationError",
    "DecodeError",
    "DictFlagContext",
    "FlagContext",
    "FlagNames",
    "FormatError",
    "MissingDependencyError",
    "MissingFlagError",
    "NamespaceFlagContext",
    "ResolverConfig",
    "ResolverError",
    "WriteError",
    "get_config",
]
