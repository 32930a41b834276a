"""Meal composition before it reaches the cart.

A MealDraft holds the add-ons chosen for one meal and a quantity. It prices
itself the same way the cart will, and produces the CartCandidate that the
cart merges on. In edit mode the draft replaces the line it was opened from.
"""

from protean.exceptions import ValidationError

from storefront.cart.values import AddOn, CartCandidate, LineIdentity, LineKind
from storefront.catalog.models import Meal


class MealDraft:
    def __init__(self, meal: Meal, selected_ids=(), quantity: int = 1) -> None:
        self.meal = meal
        self._optional = {i.id: i for i in meal.optional_ingredients}
        self.selected_ids: set[str] = set()
        for ingredient_id in selected_ids:
            self._check_optional(str(ingredient_id))
            self.selected_ids.add(str(ingredient_id))
        self.quantity = 1
        self.set_quantity(quantity)

    def _check_optional(self, ingredient_id: str) -> None:
        if ingredient_id not in self._optional:
            raise ValidationError(
                {"ingredient_id": [f"{ingredient_id} is not an optional ingredient of {self.meal.name}"]}
            )

    def toggle(self, ingredient_id) -> bool:
        """Select or deselect an optional ingredient. Returns True when it is now selected."""
        ingredient_id = str(ingredient_id)
        self._check_optional(ingredient_id)
        if ingredient_id in self.selected_ids:
            self.selected_ids.discard(ingredient_id)
            return False
        self.selected_ids.add(ingredient_id)
        return True

    def set_quantity(self, quantity: int) -> None:
        self.quantity = max(int(quantity), 1)

    def add_ons(self) -> tuple[AddOn, ...]:
        return tuple(
            AddOn(id=i.id, name=i.name, price=i.price)
            for i in sorted((self._optional[id_] for id_ in self.selected_ids), key=lambda i: i.id)
        )

    @property
    def unit_price(self) -> float:
        return self.meal.price + sum(add_on.price for add_on in self.add_ons())

    @property
    def total_price(self) -> float:
        return self.unit_price * self.quantity

    def candidate(self) -> CartCandidate:
        return CartCandidate(
            kind=LineKind.MEAL.value,
            product_id=self.meal.id,
            display_name=self.meal.name,
            base_price=self.unit_price,
            image_ref=self.meal.image_url,
            selected_add_ons=self.add_ons(),
            category_slug=self.meal.category_slug or None,
        )

    def add_to(self, cart):
        """Add the composed meal ``quantity`` times; returns the resulting cart line."""
        if not self.meal.available:
            raise ValidationError({"meal": [f"{self.meal.name} is out of stock"]})

        candidate = self.candidate()
        line = None
        for _ in range(self.quantity):
            line = cart.add(candidate)
        return line

    def replace_in(self, cart, identity: LineIdentity):
        """Edit mode: the composition replaces the line it was opened from."""
        if identity == self.candidate().identity():
            if not self.meal.available:
                raise ValidationError({"meal": [f"{self.meal.name} is out of stock"]})
            cart.set_quantity(identity, self.quantity)
            return cart.find(identity)

        line = self.add_to(cart)
        cart.remove(identity)
        return line
