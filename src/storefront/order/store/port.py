"""Order store port (abstract interface).

Orders are owned by an external store. The storefront creates them once, reads
them back by order number or id, and changes nothing but their status.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.order.models import CreateOrderRequest, Order


@dataclass(frozen=True)
class CreatedOrder:
    """Result of a successful create."""

    id: str
    order_number: str
    order: Order


class OrderStore(ABC):
    """Abstract order store interface."""

    @abstractmethod
    async def create(self, request: CreateOrderRequest) -> CreatedOrder:
        """Persist a new order with status ``pending``."""
        ...

    @abstractmethod
    async def get(self, order_number_or_id: str) -> Order | None:
        """Look an order up by its order number (``ORD-...``) or store id.

        Returns None when no such order exists.
        """
        ...

    @abstractmethod
    async def update_status(self, order_id: str, status: str) -> Order:
        """Replace the order's status; no other field is sent."""
        ...
