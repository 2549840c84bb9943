"""Utilities package."""

from storefront.utils.helpers import (
    format_amount,
    format_ghana_phone,
    from_minor_units,
    generate_order_id,
    generate_payment_reference,
    get_timestamp,
    strip_html,
    to_minor_units,
)
from storefront.utils.logger import setup_logging

__all__ = [
    "setup_logging",
    "format_amount",
    "format_ghana_phone",
    "from_minor_units",
    "generate_order_id",
    "generate_payment_reference",
    "get_timestamp",
    "strip_html",
    "to_minor_units",
]
