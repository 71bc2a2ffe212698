"""
Instance resolution over a flag context.

Pair form:
    --instance-id / --instance-name           (one of them, or both)

List form:
    --instance-id-list / --instance-name-list (comma-separated, aligned by position)

Whichever side is missing is derived with the InstanceCodec and both flags
are overwritten with the resolved values. Nothing is written unless every
entry resolved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from swresolve.core.config import ResolverConfig, get_config
from swresolve.core.exceptions import MissingFlagError, WriteError
from swresolve.core.floats import float_event
from swresolve.core.services.codec import InstanceCodec, ResolvedInstance

if TYPE_CHECKING:
    from swresolve.core.context import FlagContext

logger = logging.getLogger(__name__)


def write_flag(ctx: FlagContext, flag: str, value: str) -> None:
    """
    Write a resolved value back into the context.

    Contexts signal rejection with WriteError; other errors raised by a
    foreign context's setter are reported as WriteError too.
    """
    try:
        ctx.set_string(flag, value)
    except WriteError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise WriteError(flag, str(e)) from e


def resolve_instance(
    required: bool,
    id_flag: str,
    name_flag: str,
    service_id_flag: str,
    ctx: FlagContext,
    config: ResolverConfig | None = None,
) -> ResolvedInstance | None:
    """
    Resolve one instance id/name pair in place.

    Args:
        required: Fail if neither flag has a value
        id_flag: Flag holding the instance id
        name_flag: Flag holding the instance name
        service_id_flag: Flag holding the id of the service the instance belongs to
        ctx: Flag context to read from and write into
        config: Resolver settings (process default if omitted)

    Returns:
        The resolved pair, or None when both flags are empty and not required

    Raises:
        MissingFlagError: Both flags empty and required
        FormatError, DecodeError, MissingDependencyError: From the codec
        WriteError: The context rejected a write-back
    """
    instance_id = ctx.get_string(id_flag)
    instance_name = ctx.get_string(name_flag)
    service_id = ctx.get_string(service_id_flag)

    if not instance_id and not instance_name:
        if required:
            raise MissingFlagError(id_flag, name_flag)
        logger.debug("neither --%s nor --%s given, skipping", id_flag, name_flag)
        return None

    codec = InstanceCodec(config)
    resolved = codec.resolve(service_id, instance_name, instance_id, name_flag=name_flag)

    write_flag(ctx, id_flag, resolved.instance_id)
    write_flag(ctx, name_flag, resolved.instance_name)

    float_event(
        "instance.resolved",
        id_flag=id_flag,
        instance_id=resolved.instance_id,
        instance_name=resolved.instance_name,
    )
    return resolved


def resolve_instance_list(
    required: bool,
    id_list_flag: str,
    name_list_flag: str,
    service_id_flag: str,
    ctx: FlagContext,
    config: ResolverConfig | None = None,
) -> list[ResolvedInstance] | None:
    """
    Resolve aligned lists of instance ids and names in place.

    Entries are paired by position. When the id list is given its length
    decides how many entries there are: extra names are dropped and missing
    ids are derived from the names. Otherwise the name list decides.

    Args:
        required: Fail if neither flag has a value
        id_list_flag: Flag holding comma-separated instance ids
        name_list_flag: Flag holding comma-separated instance names
        service_id_flag: Flag holding the service id
        ctx: Flag context to read from and write into
        config: Resolver settings (process default if omitted)

    Returns:
        Resolved entries in order, or None when both flags are empty and not required

    Raises:
        MissingFlagError: Both flags empty and required
        FormatError, DecodeError, MissingDependencyError: First failing entry
        WriteError: The context rejected a write-back
    """
    config = config or get_config()
    sep = config.list_separator

    ids_arg = ctx.get_string(id_list_flag)
    names_arg = ctx.get_string(name_list_flag)
    service_id = ctx.get_string(service_id_flag)

    if not ids_arg and not names_arg:
        if required:
            raise MissingFlagError(id_list_flag, name_list_flag)
        logger.debug("neither --%s nor --%s given, skipping", id_list_flag, name_list_flag)
        return None

    # "".split(",") == [""], so emptiness is decided on the raw strings.
    ids = ids_arg.split(sep)
    names = names_arg.split(sep)
    size = len(ids) if ids_arg else len(names)

    codec = InstanceCodec(config)
    resolved: list[ResolvedInstance] = []
    for i in range(size):
        instance_id = ids[i] if i < len(ids) else ""
        instance_name = names[i] if i < len(names) else ""
        resolved.append(
            codec.resolve(service_id, instance_name, instance_id, name_flag=name_list_flag)
        )

    if ids_arg and names_arg and len(names) > size:
        logger.debug(
            "--%s has %d entries more than --%s, ignoring them",
            name_list_flag,
            len(names) - size,
            id_list_flag,
        )

    write_flag(ctx, id_list_flag, sep.join(r.instance_id for r in resolved))
    write_flag(ctx, name_list_flag, sep.join(r.instance_name for r in resolved))

    float_event("instance_list.resolved", id_list_flag=id_list_flag, count=size)
    return resolved


__all__ = ["resolve_instance", "resolve_instance_list", "write_flag"]
