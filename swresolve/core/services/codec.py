"""
Instance Codec - instance id ⇄ (service id, instance name).

Wire format:
    <service_id>_<base64(instance_name)>

The name part uses the standard, padded base64 alphabet over the name's raw
bytes. The service id prefix is never checked against anything: an id whose
prefix names a different service than the one in context is accepted as is.

    resolve(service_id, name, id)
         ↓
    id given?   → split on "_" → base64 decode → name
         ↓
    name given? → service id required → service_id + "_" + base64(name)
         ↓
    neither     → ("", "")
"""

from __future__ import annotations

import base64
import logging

from pydantic import BaseModel, ConfigDict, Field

from swresolve.core.config import ResolverConfig, get_config
from swresolve.core.exceptions import DecodeError, FormatError, MissingDependencyError
from swresolve.core.floats import float_event

logger = logging.getLogger(__name__)

# Instance names are arbitrary bytes; surrogateescape keeps non UTF-8 bytes intact.
_TEXT_ERRORS = "surrogateescape"


class ResolvedInstance(BaseModel):
    """An instance id together with the name it encodes."""

    model_config = ConfigDict(frozen=True)

    instance_id: str = Field("", description="Opaque instance identifier")
    instance_name: str = Field("", description="Human-readable instance name")

    @property
    def is_empty(self) -> bool:
        return not self.instance_id and not self.instance_name


def b64_encode(value: str) -> str:
    """Standard padded base64 of the value's raw bytes."""
    return base64.b64encode(value.encode("utf-8", _TEXT_ERRORS)).decode("ascii")


def b64_decode(value: str) -> str:
    """
    Strict inverse of b64_encode.

    Raises:
        ValueError: If value is not valid padded standard base64 (binascii.Error)
    """
    return base64.b64decode(value, validate=True).decode("utf-8", _TEXT_ERRORS)


class InstanceCodec:
    """
    Bidirectional transform between instance ids and instance names.

    Usage:
        codec = InstanceCodec()

        codec.resolve("svc", name="X").instance_id     # "svc_WA=="
        codec.resolve("", id="svc_WA==").instance_name  # "X"
    """

    def __init__(self, config: ResolverConfig | None = None):
        self._config = config or get_config()

    @property
    def separator(self) -> str:
        return self._config.id_separator

    def encode(self, service_id: str, name: str) -> str:
        """
        Build the instance id for a name under a service.

        Raises:
            FormatError: If the name holds surrogates that map to no byte
        """
        try:
            encoded = b64_encode(name)
        except UnicodeEncodeError as e:
            raise FormatError(
                f"invalid instance name, cannot be encoded: {name!r}", value=name
            ) from e
        return f"{service_id}{self.separator}{encoded}"

    def decode(self, instance_id: str) -> str:
        """
        Extract the instance name from an instance id.

        Raises:
            FormatError: If the id does not split into exactly two parts
            DecodeError: If the name part is not valid base64
        """
        parts = instance_id.split(self.separator)
        if len(parts) != 2:
            raise FormatError(
                f"invalid instance id, cannot be split into 2 parts. {instance_id}",
                value=instance_id,
            )

        try:
            name = b64_decode(parts[1])
        except ValueError as e:
            raise DecodeError(str(e), value=instance_id) from e

        float_event("codec.decoded", instance_id=instance_id, instance_name=name)
        return name

    def resolve(
        self,
        service_id: str,
        name: str = "",
        id: str = "",
        name_flag: str | None = None,
    ) -> ResolvedInstance:
        """
        Derive whichever of id and name is missing.

        The id wins when both are given; the given name is then replaced by
        the one decoded from the id.

        Args:
            service_id: Service the instance belongs to (only needed for name → id)
            name: Instance name, may be empty
            id: Instance id, may be empty
            name_flag: Flag the name came from, used in error messages

        Returns:
            ResolvedInstance (both fields empty if neither was given)

        Raises:
            FormatError: Malformed id, or a name that cannot be encoded
            DecodeError: Name part of the id is not base64
            MissingDependencyError: Name given without a service id
        """
        if id:
            return ResolvedInstance(instance_id=id, instance_name=self.decode(id))

        if name:
            if not service_id:
                raise MissingDependencyError(name_flag or self._config.flags.instance_name)

            instance_id = self.encode(service_id, name)
            float_event("codec.encoded", instance_id=instance_id, instance_name=name)
            return ResolvedInstance(instance_id=instance_id, instance_name=name)

        return ResolvedInstance()


def encode_instance_id(service_id: str, name: str) -> str:
    """Instance id for ``name`` under ``service_id`` with default settings."""
    return InstanceCodec().encode(service_id, name)


def decode_instance_name(instance_id: str) -> str:
    """Instance name encoded in ``instance_id`` with default settings."""
    return InstanceCodec().decode(instance_id)


__all__ = [
    "InstanceCodec",
    "ResolvedInstance",
    "b64_decode",
    "b64_encode",
    "decode_instance_name",
    "encode_instance_id",
]
