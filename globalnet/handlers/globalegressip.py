import kopf
from logging import Logger
from marshmallow import ValidationError
from globalnet.controllers import GlobalEgressIPController, Operation, are_specs_equivalent
from globalnet.types.models import GlobalEgressIP, GlobalEgressIPSpec, GlobalEgressIPStatus
from globalnet.types.schemas import GlobalEgressIPSpecSchema, GlobalEgressIPStatusSchema

KIND = "GlobalEgressIP"


def load_egress_ip(name, namespace, spec, status) -> GlobalEgressIP:
    """Build the typed resource from the fields kopf hands to handlers."""
    try:
        spec_model: GlobalEgressIPSpec = GlobalEgressIPSpecSchema().load(spec or {})
    except ValidationError as e:
        raise kopf.PermanentError(f"Invalid {KIND} spec: {e.messages}")
    try:
        status_model: GlobalEgressIPStatus = GlobalEgressIPStatusSchema().load(status or {})
    except ValidationError as e:
        raise kopf.PermanentError(f"Invalid {KIND} status: {e.messages}")
    return GlobalEgressIP.from_spec(name, namespace, spec_model, status_model)


def sync(egress_ip: GlobalEgressIP, retry: int, op: Operation, patch, memo):
    """Run the controller and apply its outcome to the kopf patch."""
    controller: GlobalEgressIPController = memo.controller
    result, requeue = controller.process(egress_ip, retry, op)
    if result is not None:
        patch.status.update(GlobalEgressIPStatusSchema().dump(result.status))
    if requeue:
        raise kopf.TemporaryError(
            f"Global IP allocation for {KIND} `{egress_ip.name}` did not complete.",
            delay=memo.conf.requeue_delay_seconds,
        )


@kopf.on.resume(kind=KIND)
@kopf.on.create(kind=KIND)
def on_create(
    name, namespace, spec, status, patch, retry, memo, logger: Logger, **kwargs
):
    """Allocate global IPs to new and pre-existing GlobalEgressIPs."""
    egress_ip = load_egress_ip(name, namespace, spec, status)
    sync(egress_ip, retry, Operation.CREATE, patch, memo)


@kopf.on.update(kind=KIND, field="spec")
def on_update(
    old, new, name, namespace, spec, status, patch, retry, memo, logger: Logger, **kwargs
):
    # old and new hold the spec field only
    egress_ip = load_egress_ip(name, namespace, spec, status)
    if are_specs_equivalent(old, new):
        logger.debug(f"Spec of {KIND} `{name}` is unchanged, skipping.")
        return
    sync(egress_ip, retry, Operation.UPDATE, patch, memo)


# No other handler adds a finalizer, so kopf rarely sees the object before it is
# gone; this stays dormant until deletion releases IPs and makes it mandatory.
@kopf.on.delete(kind=KIND, optional=True)
def on_delete(name, namespace, spec, status, patch, retry, memo, logger: Logger, **kwargs):
    egress_ip = load_egress_ip(name, namespace, spec, status)
    sync(egress_ip, retry, Operation.DELETE, patch, memo)
