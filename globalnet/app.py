import kopf
import logging
import globalnet.handlers.globalegressip as globalegressip
import globalnet.handlers.probes as probes
from globalnet.types.settings import Settings
from globalnet.ipam import IPPool
from globalnet.controllers import GlobalEgressIPController
from globalnet.sensors import init_metrics_server, SensorDelegate, PrometheusMonitor


# Configure Kopf settings
@kopf.on.startup()
def setup(
    settings: kopf.OperatorSettings, memo: kopf.Memo, logger: logging.Logger, **kwargs
):
    memo.conf = Settings()

    # Initialize sensor infrastructure
    sensor_delegate = SensorDelegate()
    sensor_delegate.add(PrometheusMonitor())
    memo.sensor = sensor_delegate
    logger.info("Sensor infrastructure initialized with PrometheusMonitor")

    # TODO - prime the pool with the IPs already recorded in GlobalEgressIP statuses.
    pool = IPPool(memo.conf.global_cidr)
    memo.pool = pool
    memo.controller = GlobalEgressIPController(
        pool,
        persist_failure_status=memo.conf.persist_failure_status,
        sensor=sensor_delegate,
    )
    sensor_delegate.on_pool_state(pool.cidr, pool.size, pool.available)
    logger.info(f"GlobalEgressIP controller allocating from {pool.cidr}")

    if memo.conf.persist_failure_status:
        logger.info("Allocation failures will be recorded in GlobalEgressIP status.")

    if memo.conf.metrics_enabled:
        try:
            init_metrics_server()
        except Exception as e:
            logger.error(f"Failed to start metrics server: {e}")
            # Don't fail operator startup if metrics server fails
            logger.warning("Continuing without metrics server")

    # Limit the number of concurrent workers to prevent flooding the API
    settings.batching.worker_limit = memo.conf.worker_limit

    # Post warnings and errors as Kubernetes events
    settings.posting.enabled = True
    settings.posting.level = logging.WARNING


@kopf.on.cleanup()
def cleanup(memo: kopf.Memo, logger: logging.Logger, **kwargs):
    """Cleanup handler for operator shutdown."""
    pool = getattr(memo, "pool", None)
    if pool is not None:
        logger.info(
            f"Shutting down with {pool.size - pool.available} of {pool.size} "
            f"global IPs allocated from {pool.cidr}"
        )
    logger.info("Operator shutdown complete")


__all__ = [
    "globalegressip",
    "probes",
]
