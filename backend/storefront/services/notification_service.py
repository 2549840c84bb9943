"""Order notification fan-out.

Every channel failure is logged and reported as ``False`` in the result map;
nothing here raises into the order flow.
"""

import logging
from typing import Optional

from storefront.config import get_settings
from storefront.models.order import OrderItem
from storefront.services.email_service import EmailService, email_service
from storefront.services.sms_service import (
    SMSService,
    order_confirmation_sms,
    order_status_sms,
    sms_service,
)

logger = logging.getLogger(__name__)
settings = get_settings()


def tracking_link(order_id: str) -> str:
    """Public tracking page for an order."""
    return f"{settings.app_url}/track/{order_id}"


class NotificationService:
    """Sends order confirmation and status-change notifications by email and SMS."""

    def __init__(
        self,
        email: Optional[EmailService] = None,
        sms: Optional[SMSService] = None,
    ) -> None:
        self.email = email or email_service
        self.sms = sms or sms_service

    async def _send_email(self, recipient: str, subject: str, html: str) -> bool:
        try:
            return await self.email.send_email(recipient, subject, html)
        except Exception as e:
            logger.error("Email notification to %s failed: %s", recipient, e, exc_info=True)
            return False

    async def _send_sms(self, phone: str, message: str) -> bool:
        try:
            return await self.sms.send_sms(phone, message)
        except Exception as e:
            logger.error("SMS notification to %s failed: %s", phone, e, exc_info=True)
            return False

    async def send_order_confirmation(
        self,
        order_id: str,
        customer_name: str,
        total: float,
        items: list[OrderItem],
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> dict[str, bool]:
        """Notify the customer that an order was placed."""
        link = tracking_link(order_id)
        results: dict[str, bool] = {}

        if email:
            html = EmailService.create_order_confirmation_html(
                customer_name, order_id, total, link, items
            )
            results["email"] = await self._send_email(email, f"Order Confirmation - {order_id}", html)

        if phone:
            results["sms"] = await self._send_sms(phone, order_confirmation_sms(order_id, link))

        logger.info("Order confirmation notifications for %s: %s", order_id, results)
        return results

    async def send_status_update(
        self,
        order_id: str,
        status: str,
        customer_name: str = "Customer",
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> dict[str, bool]:
        """Notify the customer that an order changed status."""
        link = tracking_link(order_id)
        results: dict[str, bool] = {}

        if email:
            html = EmailService.create_status_update_html(customer_name, order_id, status, link)
            results["email"] = await self._send_email(email, f"Order Update - {order_id}", html)

        if phone:
            results["sms"] = await self._send_sms(phone, order_status_sms(order_id, status, link))

        logger.info("Status notifications for %s (%s): %s", order_id, status, results)
        return results


# Global notification service instance
notification_service = NotificationService()
