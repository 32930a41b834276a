"""Order store backed by the Strapi ``orders`` collection.

Orders are not localized, so no locale parameter is sent. Line items are
stored as a JSON string in the ``items`` field.
"""

import json
from datetime import UTC, datetime

import structlog

from storefront.exceptions import StoreError
from storefront.order.models import CreateOrderRequest, Order
from storefront.order.numbering import ORDER_NUMBER_PREFIX
from storefront.order.status import OrderStatus
from storefront.order.store.port import CreatedOrder, OrderStore
from storefront.utils.strapi import StrapiClient, document_id

logger = structlog.get_logger(__name__)


class StrapiOrderStore(OrderStore):
    def __init__(self, client: StrapiClient) -> None:
        self.client = client

    async def create(self, request: CreateOrderRequest) -> CreatedOrder:
        data = request.to_wire()
        data["items"] = json.dumps(data["items"])
        data["status"] = OrderStatus.PENDING.value
        data["publishedAt"] = datetime.now(UTC).isoformat()

        body = await self.client.request("POST", "/orders", json={"data": data})
        record = (body or {}).get("data")
        if not record:
            raise StoreError("Order store returned no order")

        order = Order.from_record(record, order_number=request.order_number)
        logger.info("order_created", order_id=order.id, order_number=order.order_number)
        return CreatedOrder(id=document_id(record), order_number=order.order_number, order=order)

    async def get(self, order_number_or_id: str) -> Order | None:
        if order_number_or_id.startswith(f"{ORDER_NUMBER_PREFIX}-"):
            body = await self.client.get(
                "/orders",
                params={
                    "filters[orderNumber][$eq]": order_number_or_id,
                    "sort": "createdAt:desc",
                },
            )
            entries = (body or {}).get("data") or []
            return Order.from_record(entries[0]) if entries else None

        try:
            body = await self.client.get(f"/orders/{order_number_or_id}")
        except StoreError as exc:
            if exc.status_code == 404:
                return None
            raise
        record = (body or {}).get("data")
        return Order.from_record(record) if record else None

    async def update_status(self, order_id: str, status: str) -> Order:
        body = await self.client.request("PUT", f"/orders/{order_id}", json={"data": {"status": status}})
        record = (body or {}).get("data")
        if not record:
            raise StoreError(f"Order store returned no order for {order_id}")
        return Order.from_record(record)
