"""Order submission: the asynchronous checkout sequence.

    validate -> upload image (optional, best effort) -> build payload
             -> create order -> clear cart

The sequence is not transactional. An image uploaded before a failed build or
create stays in the media library; its URL is logged and carried on the
SubmissionFailure. The cart is cleared only after the store has accepted the
order, so a failed submission can be retried as is.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalog import get_catalog
from storefront.exceptions import StoreError, SubmissionFailure, UploadFailure
from storefront.media import get_media_library
from storefront.order.models import DeliveryMethod, PaymentMethod
from storefront.order.payload import CustomerDetails, OrderPayloadBuilder, delivery_fee_for
from storefront.order.store import get_order_store
from storefront.order.store.port import CreatedOrder
from storefront.utils.logging import add_context

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ImageAttachment:
    filename: str
    content: bytes
    content_type: str = "image/jpeg"


class OrderSubmission:
    def __init__(self, catalog=None, store=None, media=None, builder: OrderPayloadBuilder | None = None) -> None:
        self.catalog = catalog or get_catalog()
        self.store = store or get_order_store()
        self.media = media or get_media_library()
        self.builder = builder or OrderPayloadBuilder(self.catalog)

    async def _upload(self, image: ImageAttachment | None, previous_image_url: str | None) -> str | None:
        if image is None:
            return previous_image_url
        try:
            return await self.media.upload(image.filename, image.content, image.content_type)
        except UploadFailure as exc:
            logger.warning(
                "image_upload_failed",
                filename=image.filename,
                error=str(exc),
                fallback=previous_image_url,
            )
            return previous_image_url

    async def submit(
        self,
        cart_id: str,
        customer: CustomerDetails,
        delivery_method: DeliveryMethod = DeliveryMethod.PICKUP,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        notes: str | None = None,
        delivery_fee_override: float | None = None,
        image: ImageAttachment | None = None,
        previous_image_url: str | None = None,
    ) -> CreatedOrder:
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(cart_id)
        lines = cart.snapshot()

        # Reject bad input before anything leaves the process
        fee = delivery_fee_for(delivery_method, delivery_fee_override, self.builder.delivery_fee)
        self.builder.validate(lines, customer, fee)

        image_url = await self._upload(image, previous_image_url)
        try:
            request = await self.builder.build(
                lines,
                customer,
                delivery_method=delivery_method,
                payment_method=payment_method,
                notes=notes,
                delivery_fee_override=delivery_fee_override,
                image_url=image_url,
            )
            add_context(order_number=request.order_number, cart_id=str(cart_id))
            created = await self.store.create(request)
        except StoreError as exc:
            orphaned = image_url if image is not None and image_url != previous_image_url else None
            logger.error(
                "order_submission_failed",
                error=str(exc),
                status_code=exc.status_code,
                orphaned_image_url=orphaned,
            )
            raise SubmissionFailure(f"Failed to create order: {exc}", uploaded_image_url=orphaned) from exc

        cart.clear()
        repo.add(cart)

        logger.info(
            "order_submitted",
            order_id=created.id,
            total=request.total,
            item_count=len(request.items),
        )
        return created
