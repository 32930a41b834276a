"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product was added to the cart, as a new line or by merging into an existing one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    kind = String(required=True, max_length=10)
    product_id = Identifier(required=True)
    add_on_ids = Text()  # JSON array of sorted add-on ids
    quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLineQuantityChanged:
    """A line's quantity was set to a new positive value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were dropped, typically after a successful order submission."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)
