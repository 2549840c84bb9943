"""Tests for payment re-verification, delivery confirmation and guest lookups."""

import httpx
import pytest

from storefront.config import get_settings
from storefront.exceptions import (
    OrderAccessDeniedError,
    OrderNotFoundError,
    OrderValidationError,
    PaymentError,
    ProductNotFoundError,
)
from storefront.models.request import CreateOrderRequest
from storefront.services.order_service import OrderService
from storefront.services.payment_service import PaymentService


def paystack_reporting(status: str, seen: list[str]) -> PaymentService:
    def handler(request: httpx.Request) -> httpx.Response:
        reference = request.url.path.rsplit("/", 1)[-1]
        seen.append(reference)
        return httpx.Response(
            200,
            json={
                "status": True,
                "data": {
                    "status": status,
                    "reference": reference,
                    "amount": 10500,
                    "paid_at": "2024-06-10T10:05:00Z",
                },
            },
        )

    return PaymentService(transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def paystack_key(monkeypatch):
    monkeypatch.setattr(get_settings(), "paystack_secret_key", "sk_test_123")


@pytest.fixture
def verified_references() -> list[str]:
    return []


@pytest.fixture
def lifecycle_service(orders, products, delivery_prices, notifications, verified_references):
    return OrderService(
        orders=orders,
        products=products,
        delivery_prices=delivery_prices,
        notifications=notifications,
        payments=paystack_reporting("success", verified_references),
    )


@pytest.fixture
async def awaiting_order(lifecycle_service, order_payload):
    order_payload["status"] = "awaiting_payment"
    order_payload["userId"] = "user-1"
    order_payload["guestEmail"] = "Ama@Example.com"
    created = await lifecycle_service.create_order(CreateOrderRequest(**order_payload))
    return created.order


async def test_verify_payment_moves_order_to_submitted(
    lifecycle_service, awaiting_order, verified_references
):
    result = await lifecycle_service.verify_order_payment(awaiting_order.orderId)

    assert verified_references == [awaiting_order.paystackReference]
    assert result.payment.amount == 105.0
    assert result.order.status == "submitted"
    assert result.order.statusHistory[-1].note == "Payment manually verified by admin"
    assert [entry.status for entry in result.order.statusHistory] == [
        "awaiting_payment",
        "submitted",
    ]


async def test_verify_payment_resends_confirmation(lifecycle_service, awaiting_order, notifications):
    await lifecycle_service.verify_order_payment(awaiting_order.orderId)

    assert len(notifications.confirmations) == 2
    assert notifications.confirmations[-1]["order_id"] == awaiting_order.orderId
    assert notifications.confirmations[-1]["email"] == "Ama@Example.com"


async def test_verify_payment_allowed_when_transitions_enforced(
    lifecycle_service, awaiting_order, monkeypatch
):
    monkeypatch.setattr(get_settings(), "enforce_status_transitions", True)

    result = await lifecycle_service.verify_order_payment(awaiting_order.orderId)

    assert result.order.status == "submitted"


async def test_failed_payment_leaves_order_untouched(
    orders, products, delivery_prices, notifications, lifecycle_service, awaiting_order
):
    service = OrderService(
        orders=orders,
        products=products,
        delivery_prices=delivery_prices,
        notifications=notifications,
        payments=paystack_reporting("failed", []),
    )

    with pytest.raises(PaymentError) as exc_info:
        await service.verify_order_payment(awaiting_order.orderId)

    assert exc_info.value.status_code == 400
    assert (await orders.get(awaiting_order.orderId)).status == "awaiting_payment"
    assert len(notifications.confirmations) == 1


async def test_verify_payment_requires_reference(lifecycle_service, order_payload):
    del order_payload["paystackReference"]
    created = await lifecycle_service.create_order(CreateOrderRequest(**order_payload))

    with pytest.raises(OrderValidationError, match="Payment reference not found"):
        await lifecycle_service.verify_order_payment(created.orderId)


async def test_verify_payment_of_missing_order(lifecycle_service):
    with pytest.raises(OrderNotFoundError):
        await lifecycle_service.verify_order_payment("ORD-missing")


async def test_confirm_delivery_by_owner(lifecycle_service, awaiting_order):
    order = await lifecycle_service.confirm_delivery(awaiting_order.orderId, "user-1")

    assert order.status == "delivered"
    assert order.statusHistory[-1].note == "Delivery confirmed by customer"


async def test_confirm_delivery_without_user_id(lifecycle_service, awaiting_order):
    order = await lifecycle_service.confirm_delivery(awaiting_order.orderId)

    assert order.status == "delivered"


async def test_confirm_delivery_rejects_other_user(lifecycle_service, orders, awaiting_order):
    with pytest.raises(OrderAccessDeniedError):
        await lifecycle_service.confirm_delivery(awaiting_order.orderId, "user-2")

    stored = await orders.get(awaiting_order.orderId)
    assert stored.status == "awaiting_payment"
    assert len(stored.statusHistory) == 1


async def test_verify_guest_ignores_case(lifecycle_service, awaiting_order):
    order = await lifecycle_service.verify_guest_order(awaiting_order.orderId, " ama@EXAMPLE.com ")

    assert order.orderId == awaiting_order.orderId


async def test_verify_guest_falls_back_to_shipping_email(lifecycle_service, order_payload):
    created = await lifecycle_service.create_order(CreateOrderRequest(**order_payload))

    order = await lifecycle_service.verify_guest_order(created.orderId, "AMA@example.com")

    assert order.shipping.email == "ama@example.com"


async def test_verify_guest_rejects_other_email(lifecycle_service, awaiting_order):
    with pytest.raises(OrderAccessDeniedError, match="Email does not match"):
        await lifecycle_service.verify_guest_order(awaiting_order.orderId, "kofi@example.com")


async def test_product_lookup(catalog_service):
    assert (await catalog_service.get_product("a")).price == 50.0
    assert (await catalog_service.get_product("lakers-cap")).teamId == "lakers"

    with pytest.raises(ProductNotFoundError):
        await catalog_service.get_product("no-such-product")
