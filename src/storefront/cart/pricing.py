"""Pricing rules over cart lines.

A line's ``base_price`` already folds in the cost of its selected add-ons at
the moment the line was created, so the effective price is the stored base
price. The salad bundling label is a display rule only; it never changes what
a line costs.
"""

from dataclasses import dataclass
from enum import Enum

from storefront.cart.values import LineKind

SALAD_TOKEN = "salad"


class BundlingLabel(Enum):
    INCLUDED_WITH_MAIN = "Included with a main"
    INCLUDED_AMONG_SALADS = "Included among salads"


@dataclass(frozen=True)
class CartTotals:
    item_count: int
    subtotal: float


def effective_price(line) -> float:
    return line.base_price


def is_free(line) -> bool:
    return effective_price(line) == 0


def line_total(line) -> float:
    return effective_price(line) * line.quantity


def is_salad_category(category_slug: str | None) -> bool:
    """Substring match of the category slug against "salad" (case-insensitive)."""
    if not category_slug:
        return False
    return SALAD_TOKEN in category_slug.lower()


def _is_meal(line) -> bool:
    return line.kind == LineKind.MEAL.value


def bundling_label(line, lines) -> BundlingLabel | None:
    """Label for a free salad line, depending on whether the cart holds a main.

    Returns None for anything that is not a free meal line in the salad family.
    """
    if not _is_meal(line) or not is_free(line) or not is_salad_category(line.category_slug):
        return None

    has_main = any(_is_meal(other) and not is_salad_category(other.category_slug) for other in lines)
    if has_main:
        return BundlingLabel.INCLUDED_WITH_MAIN
    return BundlingLabel.INCLUDED_AMONG_SALADS


def cart_totals(lines) -> CartTotals:
    lines = list(lines)
    return CartTotals(
        item_count=sum(line.quantity for line in lines),
        subtotal=sum(line_total(line) for line in lines),
    )


def format_price(amount: float, free_text: str = "Free") -> str:
    if amount == 0:
        return free_text
    return f"{amount:.2f}"
