import os
from typing import Any

_TRUE, _FALSE = {"True", "true", "yes", "1"}, {"False", "false", "no", "0"}


def _getenv(name: str, *default: Any) -> Any:
    try:
        v = os.environ[name]
        if v in _TRUE:
            return True
        elif v in _FALSE:
            return False
        else:
            return v
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: CIDR of the global IP pool that egress IPs are allocated from
GLOBAL_CIDR = str(_getenv("GLOBAL_CIDR", "242.254.1.0/24"))

#: Seconds to wait before retrying a GlobalEgressIP whose allocation failed
REQUEUE_DELAY_SECONDS = float(_getenv("REQUEUE_DELAY_SECONDS", 30))

#: Write the Allocated=False condition to status when an allocation is retried
PERSIST_FAILURE_STATUS = bool(_getenv("PERSIST_FAILURE_STATUS", False))

#: Maximum number of concurrent kopf workers
WORKER_LIMIT = int(_getenv("WORKER_LIMIT", 4))

#: Start the Prometheus metrics server on startup
METRICS_ENABLED = bool(_getenv("METRICS_ENABLED", True))


class Settings:
    """Operator settings"""

    global_cidr: str = GLOBAL_CIDR
    requeue_delay_seconds: float = REQUEUE_DELAY_SECONDS
    persist_failure_status: bool = PERSIST_FAILURE_STATUS
    worker_limit: int = WORKER_LIMIT
    metrics_enabled: bool = METRICS_ENABLED

    def __init__(
        self,
        *args,
        global_cidr: str = None,
        requeue_delay_seconds: float = None,
        persist_failure_status: bool = None,
        worker_limit: int = None,
        metrics_enabled: bool = None,
        **kwargs,
    ):
        if global_cidr is not None:
            self.global_cidr = global_cidr

        if requeue_delay_seconds is not None:
            self.requeue_delay_seconds = requeue_delay_seconds

        if persist_failure_status is not None:
            self.persist_failure_status = persist_failure_status

        if worker_limit is not None:
            self.worker_limit = worker_limit

        if metrics_enabled is not None:
            self.metrics_enabled = metrics_enabled
