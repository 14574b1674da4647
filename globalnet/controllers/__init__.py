from .base import Operation, ResourceController, meta_namespace_key
from .globalegressip import (
    GlobalEgressIPController,
    allocate_ips,
    are_specs_equivalent,
    status_changed,
)

__all__ = [
    "Operation",
    "ResourceController",
    "meta_namespace_key",
    "GlobalEgressIPController",
    "allocate_ips",
    "are_specs_equivalent",
    "status_changed",
]
