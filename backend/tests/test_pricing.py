"""Tests for order total computation."""

from storefront.models.cart import CartItem
from storefront.models.order import OrderItem
from storefront.services.pricing import calculate_totals, totals_match
from storefront.utils.helpers import from_minor_units, to_minor_units


def test_two_line_cart_with_delivery_fee():
    items = [
        CartItem(productId="a", colorId="red", quantity=1, price=50.0),
        CartItem(productId="b", colorId=None, quantity=2, price=20.0),
    ]

    assert calculate_totals(items).subtotal == 90.0

    totals = calculate_totals(items, delivery_fee=15.0)
    assert totals.subtotal == 90.0
    assert totals.shipping_cost == 15.0
    assert totals.total == 105.0


def test_customization_fee_is_charged_per_unit():
    items = [
        OrderItem(
            id="a",
            name="Jersey",
            price=89.99,
            quantity=2,
            customization={"playerName": "PARTEY", "playerNumber": "5"},
        ),
        OrderItem(id="b", name="Cap", price=24.99, quantity=1, customization={}),
    ]

    totals = calculate_totals(items, delivery_fee=10.0, customization_fee=35.0)

    assert totals.items_subtotal == 204.97
    assert totals.customization_total == 70.0
    assert totals.subtotal == 274.97
    assert totals.total == 284.97


def test_tax_is_added_to_total():
    items = [CartItem(productId="a", quantity=1, price=100.0)]

    assert calculate_totals(items, delivery_fee=5.0, tax=2.5).total == 107.5


def test_totals_match_tolerance():
    assert totals_match(105.0, 105.0)
    assert totals_match(105.01, 105.0, tolerance=0.01)
    assert not totals_match(105.02, 105.0, tolerance=0.01)
    assert not totals_match(95.0, 105.0)


def test_minor_unit_conversion():
    assert to_minor_units(105.0) == 10500
    assert from_minor_units(10500) == 105.0
