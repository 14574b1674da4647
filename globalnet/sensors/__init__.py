"""Globalnet Operator Sensor Framework.

Hook-based instrumentation of operator lifecycle events.

Key components:
- OperatorSensor: Base class defining lifecycle hooks
- SensorDelegate: Fan-out to multiple sensor backends
- PrometheusMonitor: Prometheus metrics exporter

Usage:
    from globalnet.sensors import SensorDelegate, PrometheusMonitor

    delegate = SensorDelegate()
    delegate.add(PrometheusMonitor())
"""

from globalnet.sensors.base import OperatorSensor
from globalnet.sensors.delegate import SensorDelegate
from globalnet.sensors.prometheus import PrometheusMonitor
from globalnet.sensors.server import init_metrics_server

__all__ = [
    'OperatorSensor',
    'SensorDelegate',
    'PrometheusMonitor',
    'init_metrics_server',
]
