"""Tests for the Paystack client."""

import json

import httpx
import pytest

from storefront.config import get_settings
from storefront.exceptions import PaymentConfigurationError, PaymentError
from storefront.services.payment_service import PaymentService


@pytest.fixture(autouse=True)
def paystack_key(monkeypatch):
    monkeypatch.setattr(get_settings(), "paystack_secret_key", "sk_test_123")


def service_for(handler) -> PaymentService:
    return PaymentService(transport=httpx.MockTransport(handler))


async def test_initialize_sends_minor_units_and_callback():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "status": True,
                "data": {
                    "authorization_url": "https://checkout.paystack.com/abc",
                    "access_code": "abc",
                    "reference": seen["body"]["reference"],
                },
            },
        )

    data = await service_for(handler).initialize("ama@example.com", 105.0, {"orderId": "ORD-1"})

    assert seen["url"] == "https://api.paystack.co/transaction/initialize"
    assert seen["auth"] == "Bearer sk_test_123"
    assert seen["body"]["amount"] == 10500
    assert seen["body"]["currency"] == "GHS"
    assert seen["body"]["callback_url"] == "http://localhost:3000/checkout/callback"
    assert seen["body"]["metadata"] == {"orderId": "ORD-1"}
    assert seen["body"]["reference"].startswith("PAY-")
    assert data.authorization_url == "https://checkout.paystack.com/abc"
    assert data.reference == seen["body"]["reference"]


async def test_initialize_refused_by_provider():
    def handler(request):
        return httpx.Response(400, json={"status": False, "message": "Invalid email"})

    with pytest.raises(PaymentError) as exc_info:
        await service_for(handler).initialize("ama@example.com", 10.0)

    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == "Invalid email"


async def test_initialize_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(PaymentError) as exc_info:
        await service_for(handler).initialize("ama@example.com", 10.0)

    assert exc_info.value.status_code == 502


async def test_missing_secret_key(monkeypatch):
    monkeypatch.setattr(get_settings(), "paystack_secret_key", "")

    with pytest.raises(PaymentConfigurationError):
        await service_for(lambda request: httpx.Response(200)).initialize("a@example.com", 1.0)


async def test_verify_success_returns_major_units():
    def handler(request):
        assert request.url.path == "/transaction/verify/PAY-1"
        return httpx.Response(
            200,
            json={
                "status": True,
                "data": {
                    "reference": "PAY-1",
                    "amount": 10500,
                    "status": "success",
                    "paid_at": "2024-06-10T10:00:00.000Z",
                    "channel": "mobile_money",
                    "customer": {"email": "ama@example.com"},
                },
            },
        )

    data = await service_for(handler).verify("PAY-1")

    assert data.amount == 105.0
    assert data.status == "success"
    assert data.channel == "mobile_money"


async def test_verify_unsuccessful_payment():
    def handler(request):
        return httpx.Response(200, json={"status": True, "data": {"status": "abandoned"}})

    with pytest.raises(PaymentError) as exc_info:
        await service_for(handler).verify("PAY-1")

    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"status": "abandoned"}


async def test_verify_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out")

    with pytest.raises(PaymentError) as exc_info:
        await service_for(handler).verify("PAY-1")

    assert exc_info.value.status_code == 504


async def test_verify_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable")

    with pytest.raises(PaymentError) as exc_info:
        await service_for(handler).verify("PAY-1")

    assert exc_info.value.status_code == 503


async def test_verify_provider_error_status():
    def handler(request):
        return httpx.Response(404, json={"status": False, "message": "Transaction reference not found"})

    with pytest.raises(PaymentError) as exc_info:
        await service_for(handler).verify("PAY-404")

    assert exc_info.value.status_code == 404
