"""Unit tests for the GlobalEgressIP kopf handlers."""

import logging
import kopf
import pytest
from types import SimpleNamespace
from unittest import mock
from globalnet.controllers import GlobalEgressIPController
from globalnet.controllers.base import Operation
from globalnet.handlers.globalegressip import on_create, on_update, on_delete
from globalnet.ipam import IPPool
from globalnet.types.settings import Settings

logger = logging.getLogger(__name__)


def make_memo(cidr="169.254.1.0/24", persist_failure_status=False):
    pool = IPPool(cidr)
    return SimpleNamespace(
        conf=Settings(requeue_delay_seconds=5),
        pool=pool,
        controller=GlobalEgressIPController(
            pool, persist_failure_status=persist_failure_status
        ),
    )


def call(handler, spec, status=None, memo=None, **extra):
    patch = SimpleNamespace(status={})
    handler(
        name="egress",
        namespace="submariner",
        spec=spec,
        status=status or {},
        patch=patch,
        retry=0,
        memo=memo or make_memo(),
        logger=logger,
        **extra,
    )
    return patch


class TestOnCreate:
    def test_allocates_and_patches_status(self):
        patch = call(on_create, {"numberOfIPs": 2})
        assert patch.status["allocatedIPs"] == ["169.254.1.1", "169.254.1.2"]
        conditions = patch.status["conditions"]
        assert len(conditions) == 1
        assert conditions[0]["type"] == "Allocated"
        assert conditions[0]["status"] == "True"

    def test_default_number_of_ips(self):
        patch = call(on_create, {})
        assert patch.status["allocatedIPs"] == ["169.254.1.1"]

    def test_existing_allocation_is_not_patched(self):
        memo = make_memo()
        patch = call(
            on_create,
            {"numberOfIPs": 1},
            status={"allocatedIPs": ["169.254.1.1"]},
            memo=memo,
        )
        assert patch.status == {}
        assert memo.pool.available == memo.pool.size

    def test_exhausted_pool_raises_temporary_error(self):
        memo = make_memo(cidr="10.0.0.0/30")
        patch = SimpleNamespace(status={})
        with pytest.raises(kopf.TemporaryError) as exc_info:
            on_create(
                name="egress",
                namespace="submariner",
                spec={"numberOfIPs": 3},
                status={},
                patch=patch,
                retry=1,
                memo=memo,
                logger=logger,
            )
        assert exc_info.value.delay == 5
        assert patch.status == {}
        assert memo.pool.available == 2

    def test_exhausted_pool_persists_failure_when_enabled(self):
        memo = make_memo(cidr="10.0.0.0/30", persist_failure_status=True)
        patch = SimpleNamespace(status={})
        with pytest.raises(kopf.TemporaryError):
            on_create(
                name="egress",
                namespace="submariner",
                spec={"numberOfIPs": 3},
                status={},
                patch=patch,
                retry=0,
                memo=memo,
                logger=logger,
            )
        assert patch.status["allocatedIPs"] == []
        condition = patch.status["conditions"][0]
        assert condition["status"] == "False"
        assert condition["reason"] == "IPPoolAllocationFailed"

    def test_invalid_spec_is_permanent(self):
        with pytest.raises(kopf.PermanentError):
            call(on_create, {"numberOfIPs": 0})

    def test_null_allocated_ips_is_permanent(self):
        memo = make_memo()
        with pytest.raises(kopf.PermanentError):
            call(on_create, {"numberOfIPs": 1}, status={"allocatedIPs": None}, memo=memo)
        assert memo.pool.available == memo.pool.size


class TestOnUpdate:
    def test_equivalent_specs_skipped(self):
        memo = make_memo()
        patch = call(
            on_update,
            {"numberOfIPs": 1},
            memo=memo,
            old={},
            new={"numberOfIPs": 1},
        )
        assert patch.status == {}
        assert memo.pool.available == memo.pool.size

    def test_changed_spec_not_handled_yet(self):
        memo = make_memo()
        patch = call(
            on_update,
            {"numberOfIPs": 3},
            memo=memo,
            old={"numberOfIPs": 1},
            new={"numberOfIPs": 3},
        )
        assert patch.status == {}
        assert memo.pool.available == memo.pool.size

    def test_fixed_invalid_spec_is_processed(self):
        memo = make_memo()
        process = mock.Mock(wraps=memo.controller.process)
        memo.controller.process = process
        patch = call(
            on_update,
            {"numberOfIPs": 2},
            memo=memo,
            old={"numberOfIPs": 0},
            new={"numberOfIPs": 2},
        )
        assert patch.status == {}
        process.assert_called_once()
        assert process.call_args.args[2] is Operation.UPDATE

    def test_equivalent_specs_not_processed(self):
        memo = make_memo()
        memo.controller.process = mock.Mock()
        call(on_update, {}, memo=memo, old={}, new={"numberOfIPs": 1})
        memo.controller.process.assert_not_called()

    def test_registered_on_spec_field_only(self):
        handlers = [
            handler
            for handler in kopf.get_default_registry()._changing.get_all_handlers()
            if handler.fn is on_update
        ]
        assert len(handlers) == 1
        assert tuple(handlers[0].field) == ("spec",)

    def test_invalid_new_spec_is_permanent(self):
        with pytest.raises(kopf.PermanentError):
            call(
                on_update,
                {"numberOfIPs": 0},
                old={"numberOfIPs": 2},
                new={"numberOfIPs": 0},
            )


class TestOnDelete:
    def test_does_not_release(self):
        memo = make_memo()
        memo.pool.allocate("submariner/egress")
        patch = call(
            on_delete,
            {"numberOfIPs": 1},
            status={"allocatedIPs": ["169.254.1.1"]},
            memo=memo,
        )
        assert patch.status == {}
        assert memo.pool.allocated("submariner/egress") == ["169.254.1.1"]
