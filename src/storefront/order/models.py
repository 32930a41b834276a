"""Order records exchanged with the order store.

The order store keeps line items as one serialized JSON array inside the order
record. Meal items are keyed ``mealId``/``mealName`` and drink items
``drinkId``/``drinkName``; legacy items without a ``type`` are drinks when
they carry a ``drinkId``. Reading never fails because of the items column: a
value that does not parse yields an empty list.
"""

import json
from datetime import datetime
from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.cart.values import LineKind

logger = structlog.get_logger(__name__)


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    ONLINE = "online"


class DeliveryMethod(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class IngredientSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str
    name: str
    price: float = 0.0


class OrderLineItem(BaseModel):
    """Submission-time record derived from a cart line. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    kind: LineKind
    product_id: str
    product_name: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
    total_price: float = Field(ge=0)
    base_price: float | None = None  # meal price without add-ons
    default_ingredients: tuple[IngredientSnapshot, ...] = ()
    selected_ingredients: tuple[IngredientSnapshot, ...] = ()

    def to_wire(self) -> dict:
        if self.kind is LineKind.DRINK:
            return {
                "type": LineKind.DRINK.value,
                "drinkId": self.product_id,
                "drinkName": self.product_name,
                "quantity": self.quantity,
                "unitPrice": self.unit_price,
                "totalPrice": self.total_price,
            }
        return {
            "type": LineKind.MEAL.value,
            "mealId": self.product_id,
            "mealName": self.product_name,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "totalPrice": self.total_price,
            **({"basePrice": self.base_price} if self.base_price is not None else {}),
            "defaultIngredients": [i.model_dump() for i in self.default_ingredients],
            "selectedIngredients": [i.model_dump() for i in self.selected_ingredients],
        }

    @classmethod
    def from_wire(cls, data: dict) -> "OrderLineItem":
        kind = data.get("type") or (LineKind.DRINK.value if "drinkId" in data else LineKind.MEAL.value)
        if kind == LineKind.DRINK.value:
            product_id, product_name = data["drinkId"], data.get("drinkName", "")
        else:
            product_id, product_name = data["mealId"], data.get("mealName", "")
        return cls(
            kind=LineKind(kind),
            product_id=str(product_id),
            product_name=product_name or "",
            quantity=data["quantity"],
            unit_price=data["unitPrice"],
            total_price=data["totalPrice"],
            base_price=data.get("basePrice"),
            default_ingredients=tuple(data.get("defaultIngredients") or ()),
            selected_ingredients=tuple(data.get("selectedIngredients") or ()),
        )


def parse_items(raw) -> list[OrderLineItem]:
    """Decode the persisted items column; anything malformed degrades to []."""
    if not raw:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("order_items_unparseable", reason="invalid json")
            return []
    if not isinstance(raw, list):
        logger.warning("order_items_unparseable", reason=f"expected a list, got {type(raw).__name__}")
        return []
    try:
        return [OrderLineItem.from_wire(entry) for entry in raw]
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.warning("order_items_unparseable", reason=str(exc))
        return []


class CreateOrderRequest(BaseModel):
    """Normalized order submission, ready to be sent to the order store."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    order_number: str
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    items: tuple[OrderLineItem, ...]
    subtotal: float
    delivery_fee: float = 0.0
    total: float
    notes: str | None = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP
    image_url: str | None = None

    def to_wire(self) -> dict:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"items"})
        data["items"] = [item.to_wire() for item in self.items]
        return data


class Order(BaseModel):
    """An order as read back from the order store.

    ``status`` is kept as the raw string so that unknown values reach the
    tracker (which maps them to "no progress") instead of failing the read.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    order_number: str
    customer_name: str = ""
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    items: list[OrderLineItem] = Field(default_factory=list)
    subtotal: float = 0.0
    delivery_fee: float = 0.0
    total: float = 0.0
    notes: str | None = None
    payment_method: str = PaymentMethod.CASH.value
    delivery_method: str = DeliveryMethod.PICKUP.value
    status: str = "pending"
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: dict, order_number: str = "") -> "Order":
        """Build from a store record (flat, or Strapi-style with ``attributes``)."""
        attrs = record.get("attributes") or record
        return cls(
            id=str(record.get("documentId") or record.get("id") or attrs.get("id") or ""),
            order_number=attrs.get("orderNumber") or order_number,
            customer_name=attrs.get("customerName") or "",
            customer_email=attrs.get("customerEmail"),
            customer_phone=attrs.get("customerPhone"),
            customer_address=attrs.get("customerAddress"),
            items=parse_items(attrs.get("items")),
            subtotal=attrs.get("subtotal") or 0.0,
            delivery_fee=attrs.get("deliveryFee") or 0.0,
            total=attrs.get("total") or 0.0,
            notes=attrs.get("notes"),
            payment_method=attrs.get("paymentMethod") or PaymentMethod.CASH.value,
            delivery_method=attrs.get("deliveryMethod") or DeliveryMethod.PICKUP.value,
            status=attrs.get("status") or "pending",
            image_url=attrs.get("imageUrl"),
            created_at=attrs.get("createdAt"),
            updated_at=attrs.get("updatedAt"),
        )

    def to_wire(self) -> dict:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"items"})
        data["items"] = [item.to_wire() for item in self.items]
        return data
