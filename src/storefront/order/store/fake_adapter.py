"""In-memory order store for development and testing.

Records are kept in the same shape the Strapi adapter sends (camelCase keys,
items serialized to a JSON string), so reads exercise the same parsing path.
It can be configured to fail, which tests use for the submission and status
update failure paths.
"""

import json
from datetime import UTC, datetime
from itertools import count

from storefront.exceptions import StoreError
from storefront.order.models import CreateOrderRequest, Order
from storefront.order.status import OrderStatus
from storefront.order.store.port import CreatedOrder, OrderStore


class FakeOrderStore(OrderStore):
    """Configurable in-memory order store."""

    def __init__(self) -> None:
        self.records: dict[str, dict] = {}
        self.calls: list[dict] = []
        self.fail_create: bool = False
        self.fail_get: bool = False
        self.fail_update: bool = False
        self._ids = count(1)

    def configure(self, fail_create=False, fail_get=False, fail_update=False) -> None:
        self.fail_create = fail_create
        self.fail_get = fail_get
        self.fail_update = fail_update

    async def create(self, request: CreateOrderRequest) -> CreatedOrder:
        self.calls.append({"method": "create", "order_number": request.order_number})
        if self.fail_create:
            raise StoreError("Order store unavailable", status_code=503)

        now = datetime.now(UTC).isoformat()
        record = request.to_wire()
        record["items"] = json.dumps(record["items"])
        record.update(
            id=str(next(self._ids)),
            status=OrderStatus.PENDING.value,
            createdAt=now,
            updatedAt=now,
        )
        self.records[record["id"]] = record

        order = Order.from_record(record)
        return CreatedOrder(id=order.id, order_number=order.order_number, order=order)

    async def get(self, order_number_or_id: str) -> Order | None:
        self.calls.append({"method": "get", "key": order_number_or_id})
        if self.fail_get:
            raise StoreError("Order store unavailable", status_code=503)

        record = self.records.get(order_number_or_id) or next(
            (r for r in self.records.values() if r.get("orderNumber") == order_number_or_id),
            None,
        )
        if record is None:
            return None
        return Order.from_record(record)

    async def update_status(self, order_id: str, status: str) -> Order:
        self.calls.append({"method": "update_status", "order_id": order_id, "status": status})
        if self.fail_update:
            raise StoreError("Order store unavailable", status_code=503)

        record = self.records.get(order_id)
        if record is None:
            raise StoreError(f"Order {order_id} not found", status_code=404)
        record["status"] = status
        record["updatedAt"] = datetime.now(UTC).isoformat()
        return Order.from_record(record)
