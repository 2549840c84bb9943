"""Utility helper functions."""

import random
import re
import string
import time
from datetime import UTC, datetime

_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def _random_suffix(length: int = 9) -> str:
    return "".join(random.choices(_REFERENCE_ALPHABET, k=length))


def generate_payment_reference() -> str:
    """Generate a unique payment reference, e.g. ``PAY-1718000000000-7GQ2K9XZA``."""
    return f"PAY-{int(time.time() * 1000)}-{_random_suffix()}"


def generate_order_id() -> str:
    """Generate an order id in the storefront's ``ORD-`` format."""
    return f"ORD-{int(time.time() * 1000)}-{_random_suffix()}"


def get_timestamp() -> str:
    """Get current UTC timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def to_minor_units(amount: float) -> int:
    """Convert cedis to pesewas (Paystack amounts are in minor units)."""
    return int(round(amount * 100))


def from_minor_units(amount: int | float) -> float:
    """Convert pesewas back to cedis."""
    return amount / 100


def format_ghana_phone(phone: str) -> str:
    """Normalize a Ghana phone number to ``233XXXXXXXXX``."""
    cleaned = re.sub(r"\D", "", phone)
    if cleaned.startswith("0"):
        cleaned = cleaned[1:]
    if not cleaned.startswith("233"):
        cleaned = "233" + cleaned
    return cleaned


def strip_html(html: str) -> str:
    """Strip HTML tags for a plain text fallback."""
    return re.sub(r"<[^>]*>", "", html)


def format_amount(amount: float, symbol: str = "₵") -> str:
    """Format a cedi amount for display."""
    return f"{symbol}{amount:,.2f}"
