from globalnet.handlers import globalegressip, probes

__all__ = [
    "globalegressip",
    "probes",
]
