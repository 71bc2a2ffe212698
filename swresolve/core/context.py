"""
Flag context - the store of command-line flag values resolvers work on.

Resolvers never define flags. They read the current string value of a flag
and overwrite it with the resolved one. Anything with ``get_string`` and
``set_string`` can be passed in; two implementations are provided:

- DictFlagContext: in-memory store, optionally restricted to declared flags
- NamespaceFlagContext: adapter over an ``argparse.Namespace``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from swresolve.core.exceptions import WriteError

if TYPE_CHECKING:
    import argparse
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


@runtime_checkable
class FlagContext(Protocol):
    """Read/write capability over flag values."""

    def get_string(self, flag: str) -> str:
        """Return the flag's value, or an empty string if it is unset."""
        ...

    def set_string(self, flag: str, value: str) -> None:
        """Overwrite the flag's value, raising WriteError if rejected."""
        ...


class DictFlagContext:
    """
    In-memory flag context.

    Usage:
        >>> ctx = DictFlagContext({"instance-name": "pod-1", "service-id": "c3Zj.1"})
        >>> ctx.get_string("instance-id")
        ''
        >>> ctx.set_string("instance-id", "c3Zj.1_cG9kLTE=")

    When ``declared`` is given, only those flags may be written, the way a CLI
    rejects setting a flag it never registered. Flags in ``read_only`` are
    always rejected.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        declared: Iterable[str] | None = None,
        read_only: Iterable[str] = (),
    ):
        self._values: dict[str, str] = {
            k: "" if v is None else str(v) for k, v in (values or {}).items()
        }
        self._declared = frozenset(declared) if declared is not None else None
        self._read_only = frozenset(read_only)

    def get_string(self, flag: str) -> str:
        return self._values.get(flag, "")

    def set_string(self, flag: str, value: str) -> None:
        if self._declared is not None and flag not in self._declared:
            raise WriteError(flag, "no such flag")
        if flag in self._read_only:
            raise WriteError(flag, "flag is read-only")

        self._values[flag] = value
        logger.debug("flag %s set to %r", flag, value)

    def as_dict(self) -> dict[str, str]:
        """Snapshot of the current values."""
        return dict(self._values)

    def __contains__(self, flag: object) -> bool:
        return flag in self._values

    def __repr__(self) -> str:
        return f"DictFlagContext({self._values!r})"


class NamespaceFlagContext:
    """
    Flag context over parsed ``argparse`` arguments.

    Flag ``instance-id`` maps to attribute ``instance_id``. Only attributes the
    parser created can be written.
    """

    def __init__(self, namespace: argparse.Namespace):
        self.namespace = namespace

    @staticmethod
    def attribute_name(flag: str) -> str:
        return flag.replace("-", "_")

    def get_string(self, flag: str) -> str:
        value = getattr(self.namespace, self.attribute_name(flag), None)
        return "" if value is None else str(value)

    def set_string(self, flag: str, value: str) -> None:
        attr = self.attribute_name(flag)
        if not hasattr(self.namespace, attr):
            raise WriteError(flag, "no such flag")

        setattr(self.namespace, attr, value)
        logger.debug("flag %s set to %r", flag, value)


__all__ = ["DictFlagContext", "FlagContext", "NamespaceFlagContext"]
