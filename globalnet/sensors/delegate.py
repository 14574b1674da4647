"""Sensor delegation for fan-out pattern.

SensorDelegate routes every sensor event to multiple monitoring backends.
Each backend receives the same events and keeps its own state. A failing
backend is logged and never breaks reconciliation.
"""

from typing import Set, Dict, Optional, Any
import logging

from globalnet.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class SensorDelegate(OperatorSensor):
    """Delegate sensor that fans out events to multiple backends.

    Example:
        delegate = SensorDelegate()
        delegate.add(PrometheusMonitor())

        state = delegate.on_reconcile_start("egress", "default", "create", 0)
        delegate.on_reconcile_complete("egress", "default", state, "updated")
    """

    def __init__(self) -> None:
        self._sensors: Set[OperatorSensor] = set()

    def add(self, sensor: OperatorSensor) -> None:
        logger.info(f"Adding sensor: {sensor.__class__.__name__}")
        self._sensors.add(sensor)

    def remove(self, sensor: OperatorSensor) -> None:
        logger.info(f"Removing sensor: {sensor.__class__.__name__}")
        self._sensors.discard(sensor)

    def clear(self) -> None:
        logger.info(f"Clearing {len(self._sensors)} sensors")
        self._sensors.clear()

    def on_reconcile_start(
        self,
        name: str,
        namespace: str,
        operation: str,
        num_requeues: int,
    ) -> Optional[Dict[OperatorSensor, Any]]:
        """Delegate reconcile_start to all sensors.

        Returns:
            Dict mapping each sensor to its returned state, or None if no sensors
        """
        if not self._sensors:
            return None

        states = {}
        for sensor in self._sensors:
            try:
                state = sensor.on_reconcile_start(name, namespace, operation, num_requeues)
                if state is not None:
                    states[sensor] = state
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_reconcile_start: {e}",
                    exc_info=True,
                )

        return states if states else None

    def on_reconcile_complete(
        self,
        name: str,
        namespace: str,
        state: Optional[Dict[OperatorSensor, Any]],
        result: str,
    ) -> None:
        for sensor in self._sensors:
            try:
                sensor_state = state.get(sensor) if state else None
                sensor.on_reconcile_complete(name, namespace, sensor_state, result)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_reconcile_complete: {e}",
                    exc_info=True,
                )

    def on_ips_allocated(self, name: str, namespace: str, count: int) -> None:
        for sensor in self._sensors:
            try:
                sensor.on_ips_allocated(name, namespace, count)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_ips_allocated: {e}",
                    exc_info=True,
                )

    def on_allocation_failed(self, name: str, namespace: str, requested: int) -> None:
        for sensor in self._sensors:
            try:
                sensor.on_allocation_failed(name, namespace, requested)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_allocation_failed: {e}",
                    exc_info=True,
                )

    def on_pool_state(self, cidr: str, size: int, available: int) -> None:
        for sensor in self._sensors:
            try:
                sensor.on_pool_state(cidr, size, available)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_pool_state: {e}",
                    exc_info=True,
                )
