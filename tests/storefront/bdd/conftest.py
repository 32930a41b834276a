"""Shared BDD fixtures and step definitions for the Storefront."""

import asyncio

import pytest
from protean import current_domain
from pytest_bdd import given, parsers

from storefront.cart.cart import ShoppingCart
from storefront.cart.draft import MealDraft
from storefront.cart.values import CartCandidate
from storefront.catalog.models import Meal
from storefront.order.models import CreateOrderRequest


@pytest.fixture()
def greens():
    return Meal(id="greens", category_slug="salads", name="Greens", price=0.0)


@pytest.fixture()
def menu(catalog, roll_a, soda, greens):
    """Product name -> catalog product."""
    catalog.seed(greens)
    return {roll_a.name: roll_a, soda.name: soda, greens.name: greens}


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def add_to_cart(menu):
    """Add a product from the menu by name, optionally with one named add-on."""

    def _add(cart, name, add_on_name=None, quantity=1):
        product = menu[name]
        if isinstance(product, Meal):
            selected = [i.id for i in product.optional_ingredients if i.name == add_on_name]
            return MealDraft(product, selected_ids=selected, quantity=quantity).add_to(cart)
        line = None
        for _ in range(quantity):
            line = cart.add(CartCandidate.drink(product.id, product.name, product.price))
        return line

    return _add


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = ShoppingCart.create(session_id="sess-bdd")
    current_domain.repository_for(ShoppingCart).add(cart)
    return cart


@given(parsers.cfparse('a placed order "{order_number}"'), target_fixture="placed_order")
def placed_order(order_store, order_number):
    return asyncio.run(
        order_store.create(
            CreateOrderRequest(order_number=order_number, customer_name="Dana", items=(), subtotal=42.0, total=42.0)
        )
    )


@given("the order store is down")
def order_store_down(order_store):
    order_store.configure(fail_create=True, fail_get=True, fail_update=True)
