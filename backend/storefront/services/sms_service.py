"""SMS service backed by the Arkesel API."""

import logging
from typing import Optional

import httpx

from storefront.config import get_settings
from storefront.utils.helpers import format_ghana_phone

logger = logging.getLogger(__name__)
settings = get_settings()

STATUS_LABELS = {
    "confirmed": "has been confirmed",
    "processing": "is being processed",
    "in_transit": "is on the way",
    "out_for_delivery": "is out for delivery",
    "delivered": "has been delivered",
    "cancelled": "has been cancelled",
}


def order_confirmation_sms(order_id: str, tracking_link: str) -> str:
    return (
        f"Cediman: Your order {order_id} has been received. "
        f"Track it here: {tracking_link}"
    )


def order_status_sms(order_id: str, status: str, tracking_link: str) -> str:
    label = STATUS_LABELS.get(status, f"is now {status.replace('_', ' ')}")
    return f"Cediman: Your order {order_id} {label}. Track: {tracking_link}"


class SMSService:
    """Sends transactional SMS through Arkesel."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    def is_available(self) -> bool:
        """Check if the SMS provider is configured."""
        return bool(settings.arkesel_api_key)

    async def send_sms(self, phone_number: str, message: str) -> bool:
        """Send an SMS. Returns False on any provider or network failure."""
        if not self.is_available():
            logger.warning("Arkesel API key not configured - SMS to %s skipped", phone_number)
            return False

        payload = {
            "sender": settings.arkesel_sender_id,
            "message": message,
            "recipients": [format_ghana_phone(phone_number)],
            "sandbox": settings.arkesel_sandbox,
        }

        try:
            async with httpx.AsyncClient(
                base_url=settings.arkesel_base_url,
                headers={"api-key": settings.arkesel_api_key},
                timeout=settings.sms_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/sms/send", json=payload)

            data = response.json()
            if response.is_success and data.get("code") == "ok":
                logger.info("SMS sent successfully to %s", payload["recipients"][0])
                return True

            logger.error("Arkesel rejected SMS to %s: %s", phone_number, data.get("message"))
            return False

        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error sending SMS to %s: %s", phone_number, e)
            return False


# Global SMS service instance
sms_service = SMSService()
