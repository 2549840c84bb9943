"""Services package."""

from storefront.services.cart_service import CartService, cart_service, reconcile_carts
from storefront.services.catalog_service import CatalogService, catalog_service
from storefront.services.dashboard_service import DashboardService, dashboard_service
from storefront.services.data_loader import DataLoader
from storefront.services.email_service import EmailService, email_service
from storefront.services.league_matcher import LEAGUE_ALIASES, matches, normalize_league_name
from storefront.services.notification_service import NotificationService, notification_service
from storefront.services.order_service import OrderService, order_service
from storefront.services.payment_service import PaymentService, payment_service
from storefront.services.pricing import OrderTotals, calculate_totals, totals_match
from storefront.services.sms_service import SMSService, sms_service

__all__ = [
    "CartService",
    "cart_service",
    "reconcile_carts",
    "CatalogService",
    "catalog_service",
    "DashboardService",
    "dashboard_service",
    "DataLoader",
    "EmailService",
    "email_service",
    "LEAGUE_ALIASES",
    "matches",
    "normalize_league_name",
    "NotificationService",
    "notification_service",
    "OrderService",
    "order_service",
    "PaymentService",
    "payment_service",
    "OrderTotals",
    "calculate_totals",
    "totals_match",
    "SMSService",
    "sms_service",
]
