"""Cart line management: commands and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.values import AddOn, CartCandidate, LineIdentity
from storefront.domain import storefront


def _parse_add_ons(raw) -> tuple[AddOn, ...]:
    entries = json.loads(raw) if isinstance(raw, str) else (raw or [])
    return tuple(AddOn.from_dict(entry) for entry in entries)


def _parse_ids(raw) -> tuple[str, ...]:
    entries = json.loads(raw) if isinstance(raw, str) else (raw or [])
    return tuple(str(entry) for entry in entries)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    kind = String(required=True, max_length=10)
    product_id = Identifier(required=True)
    display_name = String(required=True, max_length=255)
    base_price = Float(required=True, min_value=0.0)
    image_ref = String(max_length=1024)
    selected_add_ons = Text()  # JSON: list of {id, name, price}
    category_slug = String(max_length=100)


@storefront.command(part_of="ShoppingCart")
class SetLineQuantity:
    cart_id = Identifier(required=True)
    kind = String(required=True, max_length=10)
    product_id = Identifier(required=True)
    add_on_ids = Text()  # JSON: list of add-on ids
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    kind = String(required=True, max_length=10)
    product_id = Identifier(required=True)
    add_on_ids = Text()  # JSON: list of add-on ids


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.add(
            CartCandidate(
                kind=command.kind,
                product_id=str(command.product_id),
                display_name=command.display_name,
                base_price=command.base_price,
                image_ref=command.image_ref or "",
                selected_add_ons=_parse_add_ons(command.selected_add_ons),
                category_slug=command.category_slug,
            )
        )
        repo.add(cart)

    @handle(SetLineQuantity)
    def set_line_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        identity = LineIdentity(command.kind, str(command.product_id), _parse_ids(command.add_on_ids))
        cart.set_quantity(identity, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        identity = LineIdentity(command.kind, str(command.product_id), _parse_ids(command.add_on_ids))
        cart.remove(identity)
        repo.add(cart)
