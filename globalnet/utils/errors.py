class IPPoolError(Exception):
    """Base class for global IP pool errors."""


class IPPoolExhausted(IPPoolError):
    """No free address is left in the pool."""

    def __init__(self, cidr: str):
        self.cidr = cidr
        super().__init__(f"IP pool {cidr} is exhausted")


class InvalidAllocationRequest(IPPoolError):
    """The allocation request cannot be served, e.g. the owner key is empty."""
