"""FastAPI routes for the Storefront: carts, checkout and order tracking."""

import base64
import binascii
import json

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CreateCartRequest,
    LineIdentitySchema,
    ProgressResponse,
    SetQuantityRequest,
    StatusResponse,
    UpdateStatusRequest,
)
from storefront.cart import pricing
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart, RemoveFromCart, SetLineQuantity
from storefront.cart.management import ClearCart, CreateCart
from storefront.checkout.submission import ImageAttachment, OrderSubmission
from storefront.exceptions import OrderNotFound
from storefront.order.payload import CustomerDetails
from storefront.order.status import progress_for
from storefront.order.status_update import StatusUpdater
from storefront.order.store import get_order_store


def _bundling_label(line, lines) -> str | None:
    label = pricing.bundling_label(line, lines)
    return label.value if label else None


def _cart_response(cart: ShoppingCart) -> CartResponse:
    lines = cart.snapshot()
    totals = cart.totals()
    return CartResponse(
        cart_id=str(cart.id),
        lines=[
            CartLineResponse(
                kind=line.kind,
                product_id=str(line.product_id),
                display_name=line.display_name,
                base_price=line.base_price,
                quantity=line.quantity,
                image_ref=line.image_ref or "",
                selected_add_ons=[a.to_dict() for a in line.add_ons()],
                category_slug=line.category_slug,
                line_total=pricing.line_total(line),
                price_label=pricing.format_price(pricing.effective_price(line)),
                bundling_label=_bundling_label(line, lines),
            )
            for line in lines
        ],
        item_count=totals.item_count,
        subtotal=totals.subtotal,
        subtotal_label=pricing.format_price(totals.subtotal),
    )


def _progress_response(status: str) -> ProgressResponse:
    progress = progress_for(status)
    return ProgressResponse(
        status=progress.status,
        label=progress.label,
        cancelled=progress.cancelled,
        current_index=progress.current_index,
        steps=[
            {"key": s.key, "label": s.label, "completed": s.completed, "active": s.active}
            for s in progress.steps
        ],
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    result = current_domain.process(CreateCart(session_id=body.session_id), asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    return _cart_response(cart)


@cart_router.post("/{cart_id}/items", response_model=StatusResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> StatusResponse:
    command = AddToCart(
        cart_id=cart_id,
        kind=body.kind.value,
        product_id=body.product_id,
        display_name=body.display_name,
        base_price=body.base_price,
        image_ref=body.image_ref,
        selected_add_ons=json.dumps([a.model_dump() for a in body.selected_add_ons]),
        category_slug=body.category_slug,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.put("/{cart_id}/items", response_model=StatusResponse)
async def set_cart_item_quantity(cart_id: str, body: SetQuantityRequest) -> StatusResponse:
    command = SetLineQuantity(
        cart_id=cart_id,
        kind=body.kind.value,
        product_id=body.product_id,
        add_on_ids=json.dumps(body.add_on_ids),
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items", response_model=StatusResponse)
async def remove_cart_item(cart_id: str, body: LineIdentitySchema) -> StatusResponse:
    command = RemoveFromCart(
        cart_id=cart_id,
        kind=body.kind.value,
        product_id=body.product_id,
        add_on_ids=json.dumps(body.add_on_ids),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}", response_model=StatusResponse)
async def clear_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/checkout", status_code=201)
async def checkout(cart_id: str, body: CheckoutRequest) -> JSONResponse:
    image = None
    if body.image is not None:
        try:
            content = base64.b64decode(body.image.content_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError({"image": ["Image content is not valid base64"]}) from exc
        image = ImageAttachment(body.image.filename, content, body.image.content_type)

    created = await OrderSubmission().submit(
        cart_id,
        CustomerDetails(
            name=body.customer.name,
            email=body.customer.email,
            phone=body.customer.phone,
            address=body.customer.address,
        ),
        delivery_method=body.delivery_method,
        payment_method=body.payment_method,
        notes=body.notes,
        delivery_fee_override=body.delivery_fee,
        image=image,
        previous_image_url=body.previous_image_url,
    )
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "order": created.order.to_wire(),
            "message": "Order created successfully",
        },
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_number}")
async def get_order(order_number: str) -> JSONResponse:
    order = await get_order_store().get(order_number)
    if order is None:
        raise OrderNotFound(order_number)
    return JSONResponse(
        content={
            "order": order.to_wire(),
            "progress": _progress_response(order.status).model_dump(),
        }
    )


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_router.put("/{order_id}")
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> JSONResponse:
    order = await StatusUpdater().update(order_id, body.status)
    return JSONResponse(
        content={
            "success": True,
            "order": order.to_wire(),
            "message": "Order updated successfully",
        }
    )
