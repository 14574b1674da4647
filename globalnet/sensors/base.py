"""Base sensor classes for operator monitoring.

This module defines the base OperatorSensor class that provides lifecycle hooks
for monitoring operator events. All hooks are no-ops by default, allowing
subclasses to override only the events they care about.

Hooks follow a start/complete pattern where it makes sense:
- on_reconcile_start() returns an optional state dict
- on_reconcile_complete() receives that state dict back
"""

from typing import Dict, Optional, Any
import logging

logger = logging.getLogger(__name__)


class OperatorSensor:
    """Base sensor class for globalnet operator monitoring.

    This class defines lifecycle hooks for two categories:
    1. Reconciliation lifecycle (one transform invocation per event)
    2. Global IP allocation (per resource outcomes and pool occupancy)

    All methods are no-ops by default.

    Example:
        class LoggingSensor(OperatorSensor):
            def on_ips_allocated(self, name: str, namespace: str, count: int) -> None:
                logger.info(f"Allocated {count} IP(s) to {namespace}/{name}")
    """

    # =============================================================================
    # Reconciliation Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        name: str,
        namespace: str,
        operation: str,
        num_requeues: int,
    ) -> Optional[Dict[str, Any]]:
        """Called when a lifecycle event is handed to a controller.

        Args:
            name: Resource name
            namespace: Kubernetes namespace
            operation: Operation kind (create, update, delete)
            num_requeues: How many times this event has been retried

        Returns:
            Optional state dict passed to on_reconcile_complete
        """
        pass

    def on_reconcile_complete(
        self,
        name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        result: str,
    ) -> None:
        """Called when the controller returns.

        Args:
            name: Resource name
            namespace: Kubernetes namespace
            state: State dict returned from on_reconcile_start
            result: One of ``updated``, ``unchanged`` or ``requeued``
        """
        pass

    # =============================================================================
    # Allocation Hooks
    # =============================================================================

    def on_ips_allocated(self, name: str, namespace: str, count: int) -> None:
        """Called after a resource received its full batch of global IPs."""
        pass

    def on_allocation_failed(self, name: str, namespace: str, requested: int) -> None:
        """Called when a batch allocation failed and was rolled back."""
        pass

    def on_pool_state(self, cidr: str, size: int, available: int) -> None:
        """Called whenever pool occupancy may have changed."""
        pass
