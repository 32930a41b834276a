"""Customer-facing order tracking view.

The view starts out ``loading``. Each fetch replaces it: an order becomes
``found`` with its progress, a missing order ``not_found``, and a fetch that
raised ``failed``. A later successful fetch clears an error state.
"""

from dataclasses import dataclass
from enum import Enum

import structlog

from storefront.order.models import Order
from storefront.order.status import Progress, progress_for
from storefront.order.store import get_order_store
from storefront.order.store.port import OrderStore
from storefront.tracking.poller import StatusPoller

logger = structlog.get_logger(__name__)


class TrackerState(Enum):
    LOADING = "loading"
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


NOT_FOUND_MESSAGE = "Order not found"
FAILED_MESSAGE = "Failed to load order details"


@dataclass(frozen=True)
class TrackerView:
    state: TrackerState
    order: Order | None = None
    progress: Progress | None = None
    message: str | None = None


class OrderTracker:
    def __init__(self, order_number: str, store: OrderStore | None = None, interval: float | None = None) -> None:
        self.order_number = order_number
        self.store = store or get_order_store()
        self.view = TrackerView(state=TrackerState.LOADING)
        self.poller = StatusPoller(
            fetch=self._fetch,
            on_result=self._show,
            on_error=self._fail,
            interval=interval,
        )

    async def _fetch(self) -> Order | None:
        return await self.store.get(self.order_number)

    def _show(self, order: Order | None) -> None:
        if order is None:
            self.view = TrackerView(state=TrackerState.NOT_FOUND, message=NOT_FOUND_MESSAGE)
            return
        self.view = TrackerView(state=TrackerState.FOUND, order=order, progress=progress_for(order.status))

    def _fail(self, exc: Exception) -> None:
        logger.warning("order_tracking_fetch_failed", order_number=self.order_number, error=str(exc))
        self.view = TrackerView(state=TrackerState.FAILED, message=FAILED_MESSAGE)

    async def refresh(self) -> TrackerView:
        """Fetch once, outside the polling schedule."""
        try:
            order = await self._fetch()
        except Exception as exc:
            self._fail(exc)
        else:
            self._show(order)
        return self.view

    def start(self) -> None:
        self.poller.start()

    async def stop(self) -> None:
        await self.poller.stop()

    async def __aenter__(self) -> "OrderTracker":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
