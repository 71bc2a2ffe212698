"""
Relation resolution and command hooks.

A relation names a source and a destination instance in one command:

    resolve_instance_relation(required, ctx)
         ↓
    service-id / service-name                  (ServiceResolver)
         ↓
    instance-id / instance-name                (depends on service-id)
         ↓
    dest-service-id / dest-service-name        (ServiceResolver)
         ↓
    dest-instance-id / dest-instance-name      (depends on dest-service-id)

The first failing step aborts the chain. Values written by earlier steps
stay written.

The ``parse_*`` functions build hooks a CLI runs before a command body:

    before = parse_instance_relation(required=True)
    before(ctx)
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING

from swresolve.core.config import ResolverConfig, get_config
from swresolve.core.floats import float_event
from swresolve.core.services.instance_resolver import resolve_instance, resolve_instance_list
from swresolve.core.services.service_resolver import (
    ServiceResolver,
    resolve_dest_service,
    resolve_service,
)

if TYPE_CHECKING:
    from swresolve.core.context import FlagContext

logger = logging.getLogger(__name__)

Hook = Callable[["FlagContext"], None]


def resolve_primary_instance(
    required: bool,
    ctx: FlagContext,
    service_resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> None:
    """Resolve the service, then ``--instance-id`` / ``--instance-name``."""
    config = config or get_config()
    flags = config.flags

    resolve_service(required, ctx, service_resolver, config)
    resolve_instance(
        required, flags.instance_id, flags.instance_name, flags.service_id, ctx, config
    )


def resolve_instance_list_flags(
    required: bool,
    ctx: FlagContext,
    service_resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> None:
    """Resolve the service, then ``--instance-id-list`` / ``--instance-name-list``."""
    config = config or get_config()
    flags = config.flags

    resolve_service(required, ctx, service_resolver, config)
    resolve_instance_list(
        required,
        flags.instance_id_list,
        flags.instance_name_list,
        flags.service_id,
        ctx,
        config,
    )


def resolve_instance_relation(
    required: bool,
    ctx: FlagContext,
    service_resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> None:
    """
    Resolve the source and destination instances of a relation.

    Args:
        required: Applied to every step
        ctx: Flag context to read from and write into
        service_resolver: Service step (Base64ServiceResolver if omitted)
        config: Resolver settings (process default if omitted)

    Raises:
        ResolverError: The first error of any step, unchanged
    """
    config = config or get_config()
    flags = config.flags

    resolve_primary_instance(required, ctx, service_resolver, config)
    logger.debug("source instance resolved, resolving destination")

    resolve_dest_service(required, ctx, service_resolver, config)
    resolve_instance(
        required,
        flags.dest_instance_id,
        flags.dest_instance_name,
        flags.dest_service_id,
        ctx,
        config,
    )

    float_event(
        "relation.resolved",
        instance_id=ctx.get_string(flags.instance_id),
        dest_instance_id=ctx.get_string(flags.dest_instance_id),
    )


def parse_instance(
    required: bool,
    service_resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> Hook:
    """Hook resolving the service and the instance id/name pair."""

    def hook(ctx: FlagContext) -> None:
        resolve_primary_instance(required, ctx, service_resolver, config)

    return hook


def parse_instance_list(
    required: bool,
    service_resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> Hook:
    """Hook resolving the service and the instance id/name lists."""

    def hook(ctx: FlagContext) -> None:
        resolve_instance_list_flags(required, ctx, service_resolver, config)

    return hook


def parse_instance_relation(
    required: bool,
    service_resolver: ServiceResolver | None = None,
    config: ResolverConfig | None = None,
) -> Hook:
    """Hook resolving source and destination instances."""

    def hook(ctx: FlagContext) -> None:
        resolve_instance_relation(required, ctx, service_resolver, config)

    return hook


__all__ = [
    "Hook",
    "parse_instance",
    "parse_instance_list",
    "parse_instance_relation",
    "resolve_instance_list_flags",
    "resolve_instance_relation",
    "resolve_primary_instance",
]
