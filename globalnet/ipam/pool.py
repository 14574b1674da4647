"""In-memory pool of global IP addresses.

Addresses are handed out lowest first from the host range of a CIDR and are
tracked per owner key. The pool is shared by every reconciled resource, so all
bookkeeping happens under a single lock.

Only released addresses are stored. Never-used addresses are served from a
cursor over the host range, so the pool's footprint follows the number of
allocations rather than the size of the CIDR.
"""

import heapq
import ipaddress
import logging
import threading
from collections import defaultdict
from typing import Dict, List, Tuple

from globalnet.utils.errors import IPPoolExhausted, InvalidAllocationRequest

logger = logging.getLogger(__name__)


def host_range(network) -> Tuple[int, int]:
    """First and last allocatable address of `network`, as integers.

    Matches `ipaddress` host semantics: IPv4 skips the network and broadcast
    addresses, IPv6 skips the Subnet-Router anycast address. Networks with at
    most two addresses use all of them.
    """
    first = int(network.network_address)
    last = int(network.broadcast_address)
    if network.num_addresses <= 2:
        return first, last
    if network.version == 4:
        return first + 1, last - 1
    return first + 1, last


class IPPool:
    """Thread-safe allocator of addresses from a single CIDR."""

    def __init__(self, cidr: str) -> None:
        self._network = ipaddress.ip_network(cidr)
        self._address = type(self._network.network_address)
        self._lock = threading.Lock()
        self._first, self._last = host_range(self._network)
        self._size = self._last - self._first + 1
        # next never-allocated host; everything below it is allocated or released
        self._next = self._first
        self._released: List[int] = []
        self._owners: Dict[str, str] = {}
        self._allocations: Dict[str, List[str]] = defaultdict(list)
        logger.info(f"Created IP pool {self.cidr} with {self._size} addresses")

    @property
    def cidr(self) -> str:
        return str(self._network)

    @property
    def size(self) -> int:
        return self._size

    @property
    def available(self) -> int:
        with self._lock:
            return self._last - self._next + 1 + len(self._released)

    def allocate(self, key: str) -> str:
        """Allocate one address owned by `key`.

        Raises:
            InvalidAllocationRequest: if `key` is empty.
            IPPoolExhausted: if no free address is left.
        """
        if not key:
            raise InvalidAllocationRequest("An owner key is required to allocate an IP")
        with self._lock:
            if self._released:
                value = heapq.heappop(self._released)
            elif self._next <= self._last:
                value = self._next
                self._next += 1
            else:
                raise IPPoolExhausted(self.cidr)
            ip = str(self._address(value))
            self._owners[ip] = key
            self._allocations[key].append(ip)
        logger.debug(f"Allocated {ip} to {key!r}")
        return ip

    def release(self, *ips: str) -> None:
        """Return addresses to the pool. Addresses not allocated are ignored."""
        with self._lock:
            for ip in ips:
                key = self._owners.pop(ip, None)
                if key is None:
                    continue
                owned = self._allocations[key]
                owned.remove(ip)
                if not owned:
                    del self._allocations[key]
                heapq.heappush(self._released, int(self._address(ip)))
                logger.debug(f"Released {ip} from {key!r}")

    def allocated(self, key: str) -> List[str]:
        """Addresses currently owned by `key`."""
        with self._lock:
            return list(self._allocations.get(key, []))
