import logging
from enum import Enum
from typing import Any, Optional, Tuple
from globalnet.sensors.base import OperatorSensor


class Operation(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def meta_namespace_key(namespace: Optional[str], name: str) -> str:
    """Key of a namespaced object, `<namespace>/<name>`, or `<name>` if cluster scoped."""
    if namespace:
        return f"{namespace}/{name}"
    return name


class ResourceController:
    """Base class for controllers driven by kopf lifecycle events.

    `process` is a transform: it receives the observed object, how many times
    the event was retried and the operation kind, and returns the object whose
    status must be persisted (or None) together with a requeue flag.
    """

    KIND: str = None

    sensor: OperatorSensor

    def __init__(self, sensor: OperatorSensor = None, logger: logging.Logger = None):
        self.sensor = sensor or OperatorSensor()
        self.logger = logger or logging.getLogger(self.__class__.__module__)

    def process(self, obj: Any, num_requeues: int, op: Operation) -> Tuple[Any, bool]:
        raise NotImplementedError()
