from marshmallow import fields, validate
from globalnet.types.base import BaseSchema, EXCLUDE
from globalnet.types.models import GlobalEgressIPSpec, GlobalEgressIPStatus


class GlobalEgressIPSpecSchema(BaseSchema):
    __model__ = GlobalEgressIPSpec

    number_of_ips = fields.Int(
        data_key="numberOfIPs",
        allow_none=True,
        load_default=None,
        validate=validate.Range(min=1),
    )
    pod_selector = fields.Dict(
        data_key="podSelector", allow_none=True, load_default=None
    )


class GlobalEgressIPStatusSchema(BaseSchema):
    __model__ = GlobalEgressIPStatus

    class Meta:
        # kopf keeps its own bookkeeping under status
        unknown = EXCLUDE
        ordered = True

    allocated_ips = fields.List(
        fields.Str(), data_key="allocatedIPs", allow_none=False, load_default=list
    )
    conditions = fields.List(
        fields.Dict(), data_key="conditions", allow_none=False, load_default=list
    )
