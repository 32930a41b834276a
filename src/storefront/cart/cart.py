"""Shopping Cart aggregate (CQRS): the active session's order-in-progress.

Lines are identified by (kind, product, set of add-on ids). Adding a product
whose identity already exists bumps that line's quantity; a different add-on
set always makes a new line. Every operation is total: unknown identities on
update/remove are ignored rather than rejected, and a quantity of zero or
less removes the line instead of being stored.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.cart import pricing
from storefront.cart.events import CartCleared, CartLineAdded, CartLineQuantityChanged, CartLineRemoved
from storefront.cart.values import AddOn, CartCandidate, LineIdentity, LineKind
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartLine:
    """One cart entry. ``kind`` is the discriminator; add-ons and category are meal-only."""

    kind = String(required=True, choices=LineKind)
    product_id = Identifier(required=True)
    display_name = String(required=True, max_length=255)
    base_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image_ref = String(max_length=1024)
    selected_add_ons = Text()  # JSON array of {id, name, price}, sorted by id
    category_slug = String(max_length=100)
    added_at = DateTime()

    def add_ons(self) -> list[AddOn]:
        if not self.selected_add_ons:
            return []
        return [AddOn.from_dict(entry) for entry in json.loads(self.selected_add_ons)]

    def identity(self) -> LineIdentity:
        return LineIdentity(self.kind, str(self.product_id), tuple(a.id for a in self.add_ons()))


@storefront.aggregate
class ShoppingCart:
    session_id = String(max_length=255)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find(self, identity: LineIdentity):
        return next((line for line in self.lines if line.identity() == identity), None)

    def snapshot(self) -> list:
        return list(self.lines)

    def totals(self) -> pricing.CartTotals:
        return pricing.cart_totals(self.lines)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add(self, candidate: CartCandidate):
        """Add one unit of ``candidate``, merging into the line with the same identity."""
        identity = candidate.identity()
        existing = self.find(identity)
        now = datetime.now(UTC)

        if existing is not None:
            existing.quantity += 1
            line = existing
        else:
            is_meal = identity.kind == LineKind.MEAL.value
            add_ons = sorted(candidate.selected_add_ons, key=lambda a: a.id) if is_meal else []
            line = CartLine(
                kind=identity.kind,
                product_id=identity.product_id,
                display_name=candidate.display_name,
                base_price=candidate.base_price,
                quantity=1,
                image_ref=candidate.image_ref,
                selected_add_ons=json.dumps([a.to_dict() for a in add_ons]),
                category_slug=candidate.category_slug if is_meal else None,
                added_at=now,
            )
            self.add_lines(line)

        self.updated_at = now

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                line_id=str(line.id),
                kind=identity.kind,
                product_id=identity.product_id,
                add_on_ids=json.dumps(list(identity.add_on_ids)),
                quantity=line.quantity,
            )
        )
        return line

    def set_quantity(self, identity: LineIdentity, quantity: int) -> None:
        """Set a line's quantity to exactly ``quantity``; zero or less removes it."""
        line = self.find(identity)
        if line is None:
            return
        if quantity <= 0:
            self.remove(identity)
            return
        if line.quantity == quantity:
            return

        previous_quantity = line.quantity
        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityChanged(
                cart_id=str(self.id),
                line_id=str(line.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove(self, identity: LineIdentity) -> None:
        line = self.find(identity)
        if line is None:
            return

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                line_id=str(line.id),
                product_id=str(line.product_id),
            )
        )

    def clear(self) -> None:
        lines = list(self.lines)
        if not lines:
            return

        for line in lines:
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=len(lines)))
