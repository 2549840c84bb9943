"""Data models package."""

from storefront.models.cart import CartItem, CartItemInDB
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import (
    CustomLeague,
    CustomLeagueCreate,
    CustomTeamCreate,
    LeagueSummary,
    Team,
    TeamLeagueLink,
)
from storefront.models.order import (
    Customization,
    DeliveryPersonInfo,
    OrderInDB,
    OrderItem,
    OrderStatus,
    PaymentInfo,
    ShippingInfo,
    StatusHistoryEntry,
    StockAdjustment,
)
from storefront.models.product import Product, ProductBase, ProductColor

__all__ = [
    # Order models
    "OrderInDB",
    "OrderItem",
    "OrderStatus",
    "Customization",
    "DeliveryPersonInfo",
    "PaymentInfo",
    "ShippingInfo",
    "StatusHistoryEntry",
    "StockAdjustment",
    # Cart models
    "CartItem",
    "CartItemInDB",
    # Product models
    "Product",
    "ProductBase",
    "ProductColor",
    # League models
    "Team",
    "CustomLeague",
    "CustomLeagueCreate",
    "CustomTeamCreate",
    "LeagueSummary",
    "TeamLeagueLink",
    # Delivery models
    "DeliveryPrice",
]
