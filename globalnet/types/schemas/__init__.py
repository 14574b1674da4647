from .globalegressip import GlobalEgressIPSpecSchema, GlobalEgressIPStatusSchema

__all__ = [
    "GlobalEgressIPSpecSchema",
    "GlobalEgressIPStatusSchema",
]
