"""Order total computation."""

from typing import Iterable, Protocol

from pydantic import BaseModel

from storefront.config import get_settings

settings = get_settings()


class PricedLine(Protocol):
    price: float
    quantity: int


class OrderTotals(BaseModel):
    """Money figures of an order, in cedis."""

    items_subtotal: float
    customization_total: float
    subtotal: float
    shipping_cost: float
    tax: float
    total: float


def _has_customization(line: object) -> bool:
    customization = getattr(line, "customization", None)
    if customization is None:
        return False
    if isinstance(customization, dict):
        return bool(customization.get("playerName") or customization.get("playerNumber"))
    return bool(getattr(customization, "playerName", None) or getattr(customization, "playerNumber", None))


def calculate_totals(
    items: Iterable[PricedLine],
    delivery_fee: float = 0.0,
    tax: float = 0.0,
    customization_fee: float | None = None,
) -> OrderTotals:
    """Compute subtotal and total for a list of priced lines.

    Lines carrying a player name or number add ``customization_fee`` per unit.
    """
    fee = settings.customization_fee if customization_fee is None else customization_fee
    items_subtotal = 0.0
    customization_total = 0.0
    for line in items:
        items_subtotal += line.price * line.quantity
        if _has_customization(line):
            customization_total += fee * line.quantity

    subtotal = round(items_subtotal + customization_total, 2)
    total = round(subtotal + delivery_fee + tax, 2)
    return OrderTotals(
        items_subtotal=round(items_subtotal, 2),
        customization_total=round(customization_total, 2),
        subtotal=subtotal,
        shipping_cost=round(delivery_fee, 2),
        tax=round(tax, 2),
        total=total,
    )


def totals_match(submitted: float, expected: float, tolerance: float | None = None) -> bool:
    """Whether a client-submitted total is within tolerance of the server total."""
    limit = settings.order_total_tolerance if tolerance is None else tolerance
    return abs(submitted - expected) <= limit + 1e-9
