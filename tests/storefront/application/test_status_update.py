"""Application tests for operator status changes."""

import pytest
from protean.exceptions import ValidationError

from storefront.exceptions import OrderNotFound, StatusUpdateFailure
from storefront.order.models import CreateOrderRequest
from storefront.order.status_update import StatusUpdater


@pytest.fixture()
async def created(order_store):
    return await order_store.create(
        CreateOrderRequest(order_number="ORD-TEST-0001", customer_name="Dana", items=(), subtotal=42.0, total=42.0)
    )


@pytest.fixture()
def updater(order_store):
    return StatusUpdater()


class TestStatusUpdate:
    async def test_forward_transition(self, updater, order_store, created):
        order = await updater.update(created.id, "confirmed")
        assert order.status == "confirmed"
        assert order_store.calls[-1] == {"method": "update_status", "order_id": created.id, "status": "confirmed"}

    async def test_lookup_by_order_number(self, updater, created):
        order = await updater.update("ORD-TEST-0001", "preparing")
        assert order.status == "preparing"

    async def test_cancel(self, updater, created):
        order = await updater.update(created.id, "cancelled")
        assert order.status == "cancelled"

    async def test_backward_transition_is_rejected(self, updater, order_store, created):
        await updater.update(created.id, "ready")
        with pytest.raises(ValidationError) as exc_info:
            await updater.update(created.id, "preparing")
        assert "status" in exc_info.value.messages
        assert order_store.records[created.id]["status"] == "ready"

    async def test_cancelled_is_terminal(self, updater, created):
        await updater.update(created.id, "cancelled")
        with pytest.raises(ValidationError):
            await updater.update(created.id, "confirmed")

    async def test_unknown_status_is_rejected(self, updater, order_store, created):
        with pytest.raises(ValidationError):
            await updater.update(created.id, "teleported")
        assert all(call["method"] != "update_status" for call in order_store.calls)

    async def test_unknown_order(self, updater, created):
        with pytest.raises(OrderNotFound):
            await updater.update("404", "confirmed")


class TestStatusUpdateFailure:
    async def test_store_failure_is_not_applied(self, updater, order_store, created):
        order_store.configure(fail_update=True)
        with pytest.raises(StatusUpdateFailure):
            await updater.update(created.id, "confirmed")
        assert (await order_store.get(created.id)).status == "pending"

    async def test_lookup_failure(self, updater, order_store, created):
        order_store.configure(fail_get=True)
        with pytest.raises(StatusUpdateFailure):
            await updater.update(created.id, "confirmed")
