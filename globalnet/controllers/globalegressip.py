"""Allocation of global egress IPs for GlobalEgressIP resources."""

import copy
import logging
from typing import Any, Mapping, Optional, Tuple
from marshmallow import ValidationError
from globalnet.controllers.base import ResourceController, Operation, meta_namespace_key
from globalnet.ipam import IPPool
from globalnet.sensors.base import OperatorSensor
from globalnet.types.models import (
    DEFAULT_NUMBER_OF_IPS,
    GlobalEgressIP,
    GlobalEgressIPSpec,
    GlobalEgressIPStatus,
)
from globalnet.types.schemas import GlobalEgressIPSpecSchema
from globalnet.utils.errors import IPPoolError
from globalnet.utils.helpers import upsert_condition, deep_compare_dict

ALLOCATED = "Allocated"
ALLOCATION_SUCCEEDED = "Success"
ALLOCATION_FAILED = "IPPoolAllocationFailed"

logger = logging.getLogger(__name__)


def allocate_ips(
    key: str,
    number_of_ips: Optional[int],
    pool: IPPool,
    status: GlobalEgressIPStatus,
    logger: logging.Logger = logger,
) -> bool:
    """Allocate `number_of_ips` global IPs for `key` into `status`.

    Returns True when the allocation failed and should be retried later.
    A failed batch is returned to the pool and leaves `allocated_ips` empty.
    """
    if number_of_ips is None:
        number_of_ips = DEFAULT_NUMBER_OF_IPS

    if number_of_ips == len(status.allocated_ips):
        return False

    logger.info(f"Allocating {number_of_ips} global IP(s) for {key!r}")

    status.allocated_ips = []

    for _ in range(number_of_ips):
        try:
            ip = pool.allocate(key)
        except IPPoolError as e:
            logger.error(f"Error allocating IPs for {key!r}: {e}")
            pool.release(*status.allocated_ips)
            status.allocated_ips = []
            status.conditions = upsert_condition(
                status.conditions,
                {
                    "type": ALLOCATED,
                    "status": "False",
                    "reason": ALLOCATION_FAILED,
                    "message": f"Error allocating {number_of_ips} global IP(s) from the pool: {e}",
                },
            )
            return True

        status.allocated_ips.append(ip)

    status.conditions = upsert_condition(
        status.conditions,
        {
            "type": ALLOCATED,
            "status": "True",
            "reason": ALLOCATION_SUCCEEDED,
            "message": f"Allocated {number_of_ips} global IP(s)",
        },
    )

    return False


def status_changed(
    old_status: GlobalEgressIPStatus, new_status: GlobalEgressIPStatus
) -> bool:
    return not deep_compare_dict(old_status.as_dict(), new_status.as_dict())


def _load_spec(spec: Optional[Mapping[str, Any]]) -> Optional[GlobalEgressIPSpec]:
    try:
        return GlobalEgressIPSpecSchema().load(spec or {})
    except ValidationError:
        return None


def are_specs_equivalent(
    spec1: Optional[Mapping[str, Any]], spec2: Optional[Mapping[str, Any]]
) -> bool:
    """Whether two GlobalEgressIP specs request the same allocation.

    A spec that does not load is never equivalent to anything.
    """
    spec1, spec2 = _load_spec(spec1), _load_spec(spec2)
    if spec1 is None or spec2 is None:
        return False
    return (
        spec1.desired_number_of_ips == spec2.desired_number_of_ips
        and (spec1.pod_selector or {}) == (spec2.pod_selector or {})
    )


class GlobalEgressIPController(ResourceController):
    """Allocates global IPs from a shared pool to GlobalEgressIP resources."""

    KIND = "GlobalEgressIP"

    pool: IPPool
    persist_failure_status: bool

    def __init__(
        self,
        pool: IPPool,
        persist_failure_status: bool = False,
        sensor: OperatorSensor = None,
        logger: logging.Logger = None,
    ):
        super().__init__(sensor=sensor, logger=logger)
        self.pool = pool
        self.persist_failure_status = persist_failure_status

    def process(
        self, egress_ip: GlobalEgressIP, num_requeues: int, op: Operation
    ) -> Tuple[Optional[GlobalEgressIP], bool]:
        key = meta_namespace_key(egress_ip.namespace, egress_ip.name)
        self.logger.info(
            f"Processing {op.value} of {self.KIND} {key!r} (requeues: {num_requeues})"
        )
        state = self.sensor.on_reconcile_start(
            egress_ip.name, egress_ip.namespace, op.value, num_requeues
        )

        if op == Operation.CREATE:
            result, requeue = self._process_create(key, egress_ip)
        elif op == Operation.UPDATE:
            # TODO: reallocate when spec.numberOfIPs changes on an existing resource.
            self.logger.info(f"Update of {self.KIND} {key!r} is not handled yet")
            result, requeue = None, False
        elif op == Operation.DELETE:
            # TODO: release the resource's IPs back to the pool on deletion.
            self.logger.info(f"Delete of {self.KIND} {key!r} is not handled yet")
            result, requeue = None, False
        else:
            raise ValueError(f"Unknown operation {op!r}")

        if requeue:
            outcome = "requeued"
        elif result is not None:
            outcome = "updated"
        else:
            outcome = "unchanged"
        self.sensor.on_reconcile_complete(
            egress_ip.name, egress_ip.namespace, state, outcome
        )
        return result, requeue

    def _process_create(
        self, key: str, egress_ip: GlobalEgressIP
    ) -> Tuple[Optional[GlobalEgressIP], bool]:
        prev_status = copy.deepcopy(egress_ip.status)

        if self.on_create(key, egress_ip):
            if self.persist_failure_status:
                return egress_ip, True
            return None, True

        if not status_changed(prev_status, egress_ip.status):
            return None, False

        self.logger.debug(f"Updated {self.KIND} status for {key!r}: {egress_ip.status}")
        return egress_ip, False

    def on_create(self, key: str, egress_ip: GlobalEgressIP) -> bool:
        number_of_ips = egress_ip.spec.desired_number_of_ips
        already_allocated = number_of_ips == len(egress_ip.status.allocated_ips)

        requeue = allocate_ips(
            key, number_of_ips, self.pool, egress_ip.status, logger=self.logger
        )

        if requeue:
            self.sensor.on_allocation_failed(
                egress_ip.name, egress_ip.namespace, number_of_ips
            )
        elif not already_allocated:
            self.sensor.on_ips_allocated(egress_ip.name, egress_ip.namespace, number_of_ips)

        if not already_allocated:
            self.sensor.on_pool_state(self.pool.cidr, self.pool.size, self.pool.available)

        return requeue
