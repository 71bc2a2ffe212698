"""
Service resolution - the step every instance resolution depends on.

Instance ids embed the id of their service, so the service flags are
resolved first. Service ids use the format:

    <base64(service_name)>.<1|0>

where ``1`` marks a normal service and ``0`` a virtual one (e.g. a database
or MQ observed from its callers).

Any object with a matching ``resolve`` method can stand in for
Base64ServiceResolver wherever a ServiceResolver is accepted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from swresolve.core.config import ResolverConfig, get_config
from swresolve.core.exceptions import (
    DecodeError,
    FormatError,
    MissingFlagError,
)
from swresolve.core.floats import float_event
from swresolve.core.services.codec import b64_decode, b64_encode
from swresolve.core.services.instance_resolver import write_flag

if TYPE_CHECKING:
    from swresolve.core.context import FlagContext

logger = logging.getLogger(__name__)

SERVICE_ID_SEPARATOR = "."
NORMAL = "1"
VIRTUAL = "0"


@runtime_checkable
class ServiceResolver(Protocol):
    """Populates a service id/name flag pair in a context."""

    def resolve(self, required: bool, id_flag: str, name_flag: str, ctx: FlagContext) -> None: ...


def encode_service_id(name: str, normal: bool = True) -> str:
    try:
        encoded = b64_encode(name)
    except UnicodeEncodeError as e:
        raise FormatError(f"invalid service name, cannot be encoded: {name!r}", value=name) from e
    return f"{encoded}{SERVICE_ID_SEPARATOR}{NORMAL if normal else VIRTUAL}"


def decode_service_id(service_id: str) -> tuple[str, bool]:
    """
    Split a service id into its name and normal marker.

    Raises:
        FormatError: Not ``<base64>.<1|0>``
        DecodeError: Name part is not base64
    """
    parts = service_id.split(SERVICE_ID_SEPARATOR)
    if len(parts) != 2 or parts[1] not in (NORMAL, VIRTUAL):
        raise FormatError(
            f"invalid service id, expected <base64 name>.<1|0>: {service_id}",
            value=service_id,
        )

    try:
        name = b64_decode(parts[0])
    except ValueError as e:
        raise DecodeError(str(e), value=service_id) from e

    return name, parts[1] == NORMAL


class Base64ServiceResolver:
    """Default ServiceResolver using the base64 service id format."""

    def __init__(self, normal: bool = True):
        self.normal = normal

    def resolve(self, required: bool, id_flag: str, name_flag: str, ctx: FlagContext) -> None:
        service_id = ctx.get_string(id_flag)
        service_name = ctx.get_string(name_flag)

        if not service_id and not service_name:
            if required:
                raise MissingFlagError(id_flag, name_flag)
            return

        if service_id:
            service_name, _ = decode_service_id(service_id)
        else:
            service_id = encode_service_id(service_name, self.normal)

        write_flag(ctx, id_flag, service_id)
        write_flag(ctx, name_flag, service_name)

        logger.debug("resolved service %r -> %s", service_name, service_id)
        float_event("service.resolved", id_flag=id_flag, service_id=service_id)


def resolve_service(
    required: bool,
    ctx: FlagContext,
    resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> None:
    """Resolve the primary ``--service-id`` / ``--service-name`` pair."""
    flags = (config or get_config()).flags
    (resolver or Base64ServiceResolver()).resolve(
        required, flags.service_id, flags.service_name, ctx
    )


def resolve_dest_service(
    required: bool,
    ctx: FlagContext,
    resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> None:
    """Resolve the ``--dest-service-id`` / ``--dest-service-name`` pair."""
    flags = (config or get_config()).flags
    (resolver or Base64ServiceResolver()).resolve(
        required, flags.dest_service_id, flags.dest_service_name, ctx
    )


def resolve_service_relation(
    required: bool,
    ctx: FlagContext,
    resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> None:
    """Resolve the source and then the destination service."""
    resolve_service(required, ctx, resolver, config)
    resolve_dest_service(required, ctx, resolver, config)


__all__ = [
    "Base64ServiceResolver",
    "ServiceResolver",
    "decode_service_id",
    "encode_service_id",
    "resolve_dest_service",
    "resolve_service",
    "resolve_service_relation",
]
