"""
Core Services - identifier resolution for instance flags.

Services:
- InstanceCodec: instance id ⇄ (service id, instance name)
- resolve_instance / resolve_instance_list: pair and list resolution in a flag context
- ServiceResolver: service id/name resolution every instance step depends on
- resolve_instance_relation: source + destination instance resolution
"""

from .codec import (
    InstanceCodec,
    ResolvedInstance,
    decode_instance_name,
    encode_instance_id,
)
from .instance_resolver import resolve_instance, resolve_instance_list
from .relation_resolver import (
    parse_instance,
    parse_instance_list,
    parse_instance_relation,
    resolve_instance_relation,
)
from .service_resolver import (
    Base64ServiceResolver,
    ServiceResolver,
    decode_service_id,
    encode_service_id,
    resolve_dest_service,
    resolve_service,
    resolve_service_relation,
)

__all__ = [
    "Base64ServiceResolver",
    "InstanceCodec",
    "ResolvedInstance",
    "ServiceResolver",
    "decode_instance_name",
    "decode_service_id",
    "encode_instance_id",
    "encode_service_id",
    "parse_instance",
    "parse_instance_list",
    "parse_instance_relation",
    "resolve_instance",
    "resolve_instance_list",
    "resolve_instance_relation",
    "resolve_dest_service",
    "resolve_service",
    "resolve_service_relation",
]
