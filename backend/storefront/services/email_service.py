"""Email service for order notifications."""

import asyncio
import logging
import smtplib
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from storefront.config import get_settings
from storefront.models.order import OrderItem
from storefront.utils.helpers import format_amount, strip_html

logger = logging.getLogger(__name__)
settings = get_settings()

STATUS_TITLES = {
    "confirmed": "Order Confirmed",
    "processing": "Order is Being Processed",
    "in_transit": "Order is On the Way",
    "out_for_delivery": "Order Out for Delivery",
    "delivered": "Order Delivered",
    "cancelled": "Order Cancelled",
}

STATUS_MESSAGES = {
    "confirmed": "Your order has been confirmed and will be processed shortly.",
    "processing": "We're carefully preparing your items for shipment.",
    "in_transit": "Your order is on its way to you!",
    "out_for_delivery": "Your order is out for delivery and will arrive today.",
    "delivered": "Your order has been successfully delivered. Thank you for shopping with us!",
    "cancelled": "Your order has been cancelled. Contact us if you have any questions.",
}

_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: #dc2626; color: white; padding: 20px; text-align: center; }
    .content { background: #f9fafb; padding: 20px; }
    .box { background: white; padding: 20px; margin: 20px 0; border-radius: 8px; }
    .item { border-bottom: 1px solid #e5e7eb; padding: 10px 0; }
    .total { font-size: 18px; font-weight: bold; margin-top: 15px; }
    .button { display: inline-block; background: #dc2626; color: white; padding: 12px 24px;
              text-decoration: none; border-radius: 6px; margin: 20px 0; }
    .footer { text-align: center; color: #6b7280; font-size: 12px; margin-top: 30px; }
"""


class EmailService:
    """Email service for sending order confirmations and status updates."""

    @staticmethod
    def _wrap(title: str, body: str) -> str:
        return f"""
        <!DOCTYPE html>
        <html>
        <head><style>{_STYLE}</style></head>
        <body>
            <div class="container">
                <div class="header"><h1>{title}</h1></div>
                <div class="content">{body}</div>
                <div class="footer">
                    <p>&copy; {datetime.now().year} Cediman. All rights reserved.</p>
                </div>
            </div>
        </body>
        </html>
        """

    @staticmethod
    def create_order_confirmation_html(
        customer_name: str,
        order_id: str,
        total: float,
        tracking_link: str,
        items: list[OrderItem],
    ) -> str:
        """Create HTML email content for an order confirmation."""
        rows = "".join(
            f"""
                <div class="item">
                    <strong>{item.name}</strong><br>
                    Quantity: {item.quantity} &times; {format_amount(item.price)}
                </div>"""
            for item in items
        )
        body = f"""
            <h2>Hi {customer_name},</h2>
            <p>Thank you for your order! We've received your order and will process it shortly.</p>
            <div class="box">
                <h3>Order #{order_id}</h3>
                {rows}
                <div class="total">Total: {format_amount(total)}</div>
            </div>
            <a href="{tracking_link}" class="button">Track Your Order</a>
            <p>You'll receive updates via email and SMS as your order progresses.</p>
        """
        return EmailService._wrap("Order Confirmed!", body)

    @staticmethod
    def create_status_update_html(
        customer_name: str, order_id: str, status: str, tracking_link: str
    ) -> str:
        """Create HTML email content for a status change."""
        body = f"""
            <h2>Hi {customer_name},</h2>
            <div class="box" style="text-align: center;">
                <h3>Order #{order_id}</h3>
                <p>{STATUS_MESSAGES.get(status, "Your order status has been updated.")}</p>
            </div>
            <a href="{tracking_link}" class="button">Track Your Order</a>
        """
        return EmailService._wrap(STATUS_TITLES.get(status, "Order Update"), body)

    @staticmethod
    def _deliver(msg: MIMEMultipart) -> None:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as server:
            server.starttls()
            if settings.smtp_username and settings.smtp_password:
                server.login(settings.smtp_username, settings.smtp_password)
            server.send_message(msg)

    async def send_email(
        self,
        recipient_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send an HTML email with a plain text fallback."""
        if not settings.smtp_host:
            logger.warning("SMTP host not configured - email to %s skipped", recipient_email)
            return False

        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = settings.smtp_from_email
            msg["To"] = recipient_email

            msg.attach(MIMEText(text_content or strip_html(html_content), "plain"))
            msg.attach(MIMEText(html_content, "html"))

            await asyncio.to_thread(self._deliver, msg)

            logger.info("Email sent successfully to %s", recipient_email)
            return True

        except smtplib.SMTPAuthenticationError as e:
            logger.error("SMTP authentication failed. Check credentials: %s", e)
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP error sending email to %s: %s", recipient_email, e)
            return False


# Global email service instance
email_service = EmailService()
