from typing import Optional, List, Mapping, Dict, Any
from globalnet.types.base import BaseModel

DEFAULT_NUMBER_OF_IPS = 1


class GlobalEgressIPSpec(BaseModel):
    number_of_ips: Optional[int]
    pod_selector: Optional[Mapping[str, Any]]

    @property
    def desired_number_of_ips(self) -> int:
        """Requested number of global IPs, defaulting to one."""
        if self.number_of_ips is None:
            return DEFAULT_NUMBER_OF_IPS
        return self.number_of_ips


class GlobalEgressIPStatus(BaseModel):
    allocated_ips: List[str]
    conditions: List[Dict[str, Any]]


class GlobalEgressIP(BaseModel):
    name: str
    namespace: Optional[str]
    spec: GlobalEgressIPSpec
    status: GlobalEgressIPStatus

    @classmethod
    def from_spec(
        cls,
        name: str,
        namespace: Optional[str],
        spec: GlobalEgressIPSpec,
        status: GlobalEgressIPStatus = None,
    ) -> "GlobalEgressIP":
        if status is None:
            status = GlobalEgressIPStatus(allocated_ips=[], conditions=[])
        return cls(name=name, namespace=namespace, spec=spec, status=status)
