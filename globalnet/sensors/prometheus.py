"""Prometheus monitoring backend for the globalnet operator.

PrometheusMonitor turns sensor events into Prometheus metrics:

1. Reconciliation - duration, outcomes and requeues per operation
2. Allocation - IPs handed out and failed batches per namespace
3. Pool - size and free addresses of the global CIDR
"""

from typing import Dict, Optional, Any
import time
import logging

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, Gauge

from globalnet.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class PrometheusMonitor(OperatorSensor):
    """Prometheus metrics monitor for the globalnet operator.

    Metrics are registered in `registry`, the process-wide default registry
    unless another one is given, and exposed via the /metrics endpoint.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        super().__init__()

        self.reconcile_duration = Histogram(
            'globalnet_reconcile_duration_seconds',
            'Time spent processing a lifecycle event',
            labelnames=['namespace', 'operation', 'result'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=registry,
        )

        self.reconcile_total = Counter(
            'globalnet_reconcile_total',
            'Total number of processed lifecycle events',
            labelnames=['namespace', 'operation', 'result'],
            registry=registry,
        )

        self.ips_allocated = Counter(
            'globalnet_ips_allocated_total',
            'Total number of global IPs allocated',
            labelnames=['namespace'],
            registry=registry,
        )

        self.allocation_failures = Counter(
            'globalnet_ip_allocation_failures_total',
            'Total number of failed global IP batch allocations',
            labelnames=['namespace'],
            registry=registry,
        )

        self.pool_size = Gauge(
            'globalnet_ip_pool_size',
            'Number of allocatable addresses in the global IP pool',
            labelnames=['cidr'],
            registry=registry,
        )

        self.pool_available = Gauge(
            'globalnet_ip_pool_available',
            'Number of free addresses in the global IP pool',
            labelnames=['cidr'],
            registry=registry,
        )

        logger.info("PrometheusMonitor initialized with all metrics")

    def on_reconcile_start(
        self,
        name: str,
        namespace: str,
        operation: str,
        num_requeues: int,
    ) -> Optional[Dict[str, Any]]:
        return {
            'start_time': time.time(),
            'operation': operation,
        }

    def on_reconcile_complete(
        self,
        name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        result: str,
    ) -> None:
        if state:
            duration = time.time() - state['start_time']
            labels = dict(
                namespace=namespace or '',
                operation=state['operation'],
                result=result,
            )
            self.reconcile_duration.labels(**labels).observe(duration)
            self.reconcile_total.labels(**labels).inc()

    def on_ips_allocated(self, name: str, namespace: str, count: int) -> None:
        self.ips_allocated.labels(namespace=namespace or '').inc(count)

    def on_allocation_failed(self, name: str, namespace: str, requested: int) -> None:
        self.allocation_failures.labels(namespace=namespace or '').inc()

    def on_pool_state(self, cidr: str, size: int, available: int) -> None:
        self.pool_size.labels(cidr=cidr).set(size)
        self.pool_available.labels(cidr=cidr).set(available)
