"""Order payload construction: turns cart lines into a submission-ready order.

Drinks map straight across. Meal lines keep their add-on-inclusive price as
the unit price, record the chosen add-ons, and snapshot the meal's default
ingredients from the catalog as they are at submission time. Validation runs
before the catalog is consulted, so a rejected order never touches the
network.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from storefront.cart import pricing
from storefront.cart.values import LineKind
from storefront.catalog.port import ProductCatalog
from storefront.config import get_settings
from storefront.order.models import (
    CreateOrderRequest,
    DeliveryMethod,
    IngredientSnapshot,
    OrderLineItem,
    PaymentMethod,
)
from storefront.order.numbering import generate_order_number


@dataclass(frozen=True)
class CustomerDetails:
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None


def delivery_fee_for(
    delivery_method: DeliveryMethod,
    override: float | None = None,
    default_fee: float | None = None,
) -> float:
    """Pickup is free; delivery costs the configured fee unless the caller overrides it."""
    if delivery_method is DeliveryMethod.PICKUP:
        return 0.0
    if override is not None:
        return override
    if default_fee is not None:
        return default_fee
    return get_settings().delivery_fee


def pure_base_price(line) -> float:
    """A meal line's price without its add-ons, never below zero."""
    add_on_total = sum(add_on.price for add_on in line.add_ons())
    return max(line.base_price - add_on_total, 0.0)


class OrderPayloadBuilder:
    def __init__(
        self,
        catalog: ProductCatalog,
        delivery_fee: float | None = None,
        locale: str | None = None,
        number_factory=generate_order_number,
    ) -> None:
        self.catalog = catalog
        self.delivery_fee = delivery_fee
        self.locale = locale or get_settings().default_locale
        self.number_factory = number_factory

    def validate(self, lines, customer: CustomerDetails, fee: float) -> None:
        errors = {}
        if not customer.name or not customer.name.strip():
            errors["customer_name"] = ["Customer name is required"]
        if not lines:
            errors["items"] = ["Cannot submit an order without items"]
        if errors:
            raise ValidationError(errors)

        total = pricing.cart_totals(lines).subtotal + fee
        if total <= 0:
            raise ValidationError({"total": ["Order total must be greater than zero"]})

    async def build(
        self,
        lines,
        customer: CustomerDetails,
        delivery_method: DeliveryMethod = DeliveryMethod.PICKUP,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        notes: str | None = None,
        delivery_fee_override: float | None = None,
        image_url: str | None = None,
    ) -> CreateOrderRequest:
        lines = list(lines)
        fee = delivery_fee_for(delivery_method, delivery_fee_override, self.delivery_fee)
        self.validate(lines, customer, fee)

        items = [await self._line_item(line) for line in lines]
        subtotal = sum(item.total_price for item in items)

        return CreateOrderRequest(
            order_number=self.number_factory(),
            customer_name=customer.name.strip(),
            customer_email=customer.email or None,
            customer_phone=customer.phone or None,
            customer_address=customer.address or None,
            items=tuple(items),
            subtotal=subtotal,
            delivery_fee=fee,
            total=subtotal + fee,
            notes=notes or None,
            payment_method=payment_method,
            delivery_method=delivery_method,
            image_url=image_url,
        )

    async def _line_item(self, line) -> OrderLineItem:
        unit_price = pricing.effective_price(line)
        if line.kind == LineKind.DRINK.value:
            return OrderLineItem(
                kind=LineKind.DRINK,
                product_id=str(line.product_id),
                product_name=line.display_name,
                quantity=line.quantity,
                unit_price=unit_price,
                total_price=unit_price * line.quantity,
            )

        defaults = await self.catalog.default_ingredients(str(line.product_id), self.locale)
        return OrderLineItem(
            kind=LineKind.MEAL,
            product_id=str(line.product_id),
            product_name=line.display_name,
            quantity=line.quantity,
            unit_price=unit_price,
            total_price=unit_price * line.quantity,
            base_price=pure_base_price(line),
            default_ingredients=tuple(
                IngredientSnapshot(id=i.id, name=i.name, price=i.price) for i in defaults
            ),
            selected_ingredients=tuple(
                IngredientSnapshot(id=a.id, name=a.name, price=a.price) for a in line.add_ons()
            ),
        )
