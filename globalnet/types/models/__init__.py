from .globalegressip import (
    DEFAULT_NUMBER_OF_IPS,
    GlobalEgressIPSpec,
    GlobalEgressIPStatus,
    GlobalEgressIP,
)

__all__ = [
    "DEFAULT_NUMBER_OF_IPS",
    "GlobalEgressIPSpec",
    "GlobalEgressIPStatus",
    "GlobalEgressIP",
]
