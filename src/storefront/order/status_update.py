"""Operator status changes.

Only ``{status}`` is sent to the store. The change is checked against the
current stored status first; an illegal transition is a ValidationError and
never reaches the store. Store failures become StatusUpdateFailure and the
caller keeps showing whatever the store last reported.
"""

import structlog
from protean.exceptions import ValidationError

from storefront.exceptions import OrderNotFound, StatusUpdateFailure, StoreError
from storefront.order.models import Order
from storefront.order.status import OrderStatus, can_transition
from storefront.order.store import get_order_store
from storefront.order.store.port import OrderStore

logger = structlog.get_logger(__name__)


class StatusUpdater:
    def __init__(self, store: OrderStore | None = None) -> None:
        self.store = store or get_order_store()

    async def update(self, order_id: str, status: str) -> Order:
        valid = {s.value for s in OrderStatus}
        if status not in valid:
            raise ValidationError({"status": [f"Unknown status '{status}'"]})

        try:
            current = await self.store.get(order_id)
        except StoreError as exc:
            raise StatusUpdateFailure(f"Failed to load order {order_id}: {exc}") from exc
        if current is None:
            raise OrderNotFound(order_id)

        if not can_transition(current.status, status):
            raise ValidationError(
                {"status": [f"Cannot change status from '{current.status}' to '{status}'"]}
            )

        try:
            updated = await self.store.update_status(current.id, status)
        except StoreError as exc:
            logger.error("order_status_update_failed", order_id=current.id, target=status, error=str(exc))
            raise StatusUpdateFailure(f"Failed to update order {order_id}: {exc}") from exc

        logger.info(
            "order_status_updated",
            order_id=updated.id,
            order_number=updated.order_number,
            previous=current.status,
            status=updated.status,
        )
        return updated
