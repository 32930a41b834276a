"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the internal Protean
commands and the order store's wire models.
"""

from pydantic import BaseModel, Field

from storefront.cart.values import LineKind
from storefront.order.models import DeliveryMethod, PaymentMethod


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddOnSchema(BaseModel):
    id: str
    name: str = ""
    price: float = Field(ge=0, default=0.0)


class LineIdentitySchema(BaseModel):
    kind: LineKind
    product_id: str
    add_on_ids: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = None


class AddToCartRequest(BaseModel):
    kind: LineKind
    product_id: str
    display_name: str
    base_price: float = Field(ge=0)
    image_ref: str = ""
    selected_add_ons: list[AddOnSchema] = Field(default_factory=list)
    category_slug: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "kind": "meal",
                    "product_id": "roll-a",
                    "display_name": "Roll A",
                    "base_price": 45.0,
                    "selected_add_ons": [{"id": "spicy-mayo", "name": "Spicy Mayo", "price": 3.0}],
                    "category_slug": "rolls",
                }
            ]
        }
    }


class SetQuantityRequest(LineIdentitySchema):
    quantity: int


class CustomerSchema(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class ImageSchema(BaseModel):
    filename: str
    content_base64: str
    content_type: str = "image/jpeg"


class CheckoutRequest(BaseModel):
    customer: CustomerSchema
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = None
    delivery_fee: float | None = Field(default=None, ge=0)
    image: ImageSchema | None = None
    previous_image_url: str | None = None


# ---------------------------------------------------------------------------
# Admin Request Schemas
# ---------------------------------------------------------------------------
class UpdateStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartIdResponse(BaseModel):
    cart_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class CartLineResponse(BaseModel):
    kind: str
    product_id: str
    display_name: str
    base_price: float
    quantity: int
    image_ref: str = ""
    selected_add_ons: list[AddOnSchema] = Field(default_factory=list)
    category_slug: str | None = None
    line_total: float
    price_label: str
    bundling_label: str | None = None


class CartResponse(BaseModel):
    cart_id: str
    lines: list[CartLineResponse]
    item_count: int
    subtotal: float
    subtotal_label: str


class ProgressStepResponse(BaseModel):
    key: str
    label: str
    completed: bool
    active: bool


class ProgressResponse(BaseModel):
    status: str
    label: str
    cancelled: bool
    current_index: int
    steps: list[ProgressStepResponse]


class ErrorResponse(BaseModel):
    error: str
    message: str
