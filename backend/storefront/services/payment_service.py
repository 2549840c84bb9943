"""Paystack payment service."""

import logging
from typing import Any, Optional

import httpx

from storefront.config import get_settings
from storefront.exceptions import PaymentConfigurationError, PaymentError
from storefront.models.request import PaymentInitializeData, PaymentVerifyData
from storefront.utils.helpers import from_minor_units, generate_payment_reference, to_minor_units

logger = logging.getLogger(__name__)
settings = get_settings()


class PaymentService:
    """Initializes and verifies Paystack transactions."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    def is_available(self) -> bool:
        """Check if Paystack is configured."""
        return bool(settings.paystack_secret_key)

    def _client(self, timeout: float) -> httpx.AsyncClient:
        if not self.is_available():
            raise PaymentConfigurationError()
        return httpx.AsyncClient(
            base_url=settings.paystack_base_url,
            headers={"Authorization": f"Bearer {settings.paystack_secret_key}"},
            timeout=timeout,
            transport=self._transport,
        )

    @staticmethod
    def callback_url() -> str:
        return f"{settings.app_url}{settings.paystack_callback_path}"

    async def initialize(
        self,
        email: str,
        amount: float,
        metadata: Optional[dict[str, Any]] = None,
    ) -> PaymentInitializeData:
        """Create a hosted checkout session and return its authorization URL.

        Args:
            email: Customer email
            amount: Amount in cedis
            metadata: Free-form metadata forwarded to Paystack

        Raises:
            PaymentConfigurationError: secret key missing
            PaymentError: provider refused (400) or was unreachable (502)
        """
        reference = generate_payment_reference()
        payload = {
            "email": email,
            "amount": to_minor_units(amount),
            "currency": settings.paystack_currency,
            "reference": reference,
            "callback_url": self.callback_url(),
            "metadata": metadata or {},
        }
        logger.info(
            "Payment initialize request: reference=%s amount=%.2f callback=%s",
            reference,
            amount,
            payload["callback_url"],
        )

        try:
            async with self._client(settings.paystack_timeout) as client:
                response = await client.post("/transaction/initialize", json=payload)
            data = response.json()
        except httpx.HTTPError as e:
            logger.error("Paystack initialize network error: %s", e)
            raise PaymentError("Failed to initialize payment", status_code=502)
        except ValueError as e:
            logger.error("Paystack initialize returned invalid JSON: %s", e)
            raise PaymentError("Failed to initialize payment", status_code=502)

        if not data.get("status"):
            logger.error("Paystack initialization failed: %s", data)
            raise PaymentError(data.get("message") or "Failed to initialize payment", status_code=400)

        logger.info("Payment initialized successfully. Reference: %s", reference)
        result = data.get("data") or {}
        return PaymentInitializeData(
            authorization_url=result["authorization_url"],
            access_code=result.get("access_code"),
            reference=result.get("reference") or reference,
        )

    async def verify(self, reference: str) -> PaymentVerifyData:
        """Verify a transaction by reference.

        Raises:
            PaymentError: timeout (504), network error (503), provider error
                (provider status) or unsuccessful payment (400)
        """
        logger.info("Verifying payment with reference: %s", reference)
        try:
            async with self._client(settings.paystack_verify_timeout) as client:
                response = await client.get(f"/transaction/verify/{reference}")
            data = response.json()
        except httpx.TimeoutException:
            logger.error("Paystack verification timeout for reference: %s", reference)
            raise PaymentError("Verification timeout. Please try again.", status_code=504)
        except httpx.HTTPError as e:
            logger.error("Paystack verification network error: %s", e)
            raise PaymentError("Network error during verification", status_code=503)
        except ValueError as e:
            logger.error("Paystack verification returned invalid JSON: %s", e)
            raise PaymentError("Payment verification failed", status_code=502)

        if not response.is_success:
            logger.error("Paystack verification failed: %s", data)
            raise PaymentError(
                "Payment verification failed", status_code=response.status_code, details=data
            )

        result = data.get("data") or {}
        if data.get("status") is True and result.get("status") == "success":
            logger.info("Payment verified successfully for reference: %s", reference)
            return PaymentVerifyData(
                reference=result.get("reference", reference),
                amount=from_minor_units(result.get("amount", 0)),
                status=result["status"],
                paidAt=result.get("paid_at"),
                channel=result.get("channel"),
                customer=result.get("customer"),
                metadata=result.get("metadata"),
            )

        payment_status = result.get("status") or "unknown"
        logger.error("Payment not successful. Status: %s", payment_status)
        raise PaymentError(
            "Payment not successful", status_code=400, details={"status": payment_status}
        )


# Global payment service instance
payment_service = PaymentService()
