from globalnet.ipam.pool import IPPool

__all__ = ["IPPool"]
