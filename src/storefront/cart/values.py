"""Plain value types shared by the cart, pricing and payload code."""

from dataclasses import dataclass, field
from enum import Enum


class LineKind(Enum):
    MEAL = "meal"
    DRINK = "drink"


@dataclass(frozen=True)
class AddOn:
    """An optional, priced ingredient attached to a meal line."""

    id: str
    name: str
    price: float

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "price": self.price}

    @classmethod
    def from_dict(cls, data: dict) -> "AddOn":
        return cls(id=str(data["id"]), name=data.get("name", ""), price=float(data.get("price") or 0))


@dataclass(frozen=True)
class LineIdentity:
    """Identity of a cart line: kind, product and the set of chosen add-on ids.

    Add-on ids are de-duplicated and sorted on construction, so two identities
    built from the same ids in a different order compare equal. Drinks never
    carry add-ons.
    """

    kind: str
    product_id: str
    add_on_ids: tuple[str, ...] = ()

    def __post_init__(self):
        kind = LineKind(self.kind).value
        ids = () if kind == LineKind.DRINK.value else tuple(sorted({str(i) for i in self.add_on_ids}))
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "product_id", str(self.product_id))
        object.__setattr__(self, "add_on_ids", ids)


@dataclass(frozen=True)
class CartCandidate:
    """What the storefront hands to the cart when a product is added.

    ``base_price`` already includes the cost of ``selected_add_ons``.
    """

    kind: str
    product_id: str
    display_name: str
    base_price: float
    image_ref: str = ""
    selected_add_ons: tuple[AddOn, ...] = field(default_factory=tuple)
    category_slug: str | None = None

    def identity(self) -> LineIdentity:
        return LineIdentity(self.kind, self.product_id, tuple(a.id for a in self.selected_add_ons))

    @classmethod
    def drink(cls, product_id, display_name, price, image_ref=""):
        return cls(
            kind=LineKind.DRINK.value,
            product_id=str(product_id),
            display_name=display_name,
            base_price=price,
            image_ref=image_ref,
        )
